from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import matplotlib

matplotlib.use("Agg")

import pytest

from threshold_charts.geometry.descriptors import BoundingBox, TextSize
from threshold_charts.host import Axis, Chart


@dataclass
class _FakePrimitive:
    kind: str
    attributes: dict[str, Any] = field(default_factory=dict)


class _FakeSurface:
    """In-memory surface recording every add/set call."""

    def __init__(self, text_size: TextSize = TextSize(width=40.0, height=12.0)) -> None:
        self.groups: dict[str, list[_FakePrimitive]] = {}
        self.text_size = text_size
        self.add_calls: list[tuple[str, str]] = []
        self.set_calls: list[tuple[_FakePrimitive, dict[str, Any], bool]] = []

    def get_group(self, name: str) -> str:
        self.groups.setdefault(name, [])
        return name

    def get_at(self, group: str, index: int) -> _FakePrimitive | None:
        items = self.groups[group]
        return items[index] if 0 <= index < len(items) else None

    def add(self, kind: str, group: str, **attributes: Any) -> _FakePrimitive:
        primitive = _FakePrimitive(kind=kind, attributes=dict(attributes))
        self.groups[group].append(primitive)
        self.add_calls.append((kind, group))
        return primitive

    def set_attributes(self, handle: _FakePrimitive, attributes: dict[str, Any], redraw: bool = False) -> None:
        handle.attributes.update(attributes)
        self.set_calls.append((handle, dict(attributes), redraw))

    def measure_text(self, handle: _FakePrimitive) -> TextSize:
        return self.text_size


@pytest.fixture
def fake_surface() -> _FakeSurface:
    return _FakeSurface()


@pytest.fixture(autouse=True)
def _drop_log_handlers():
    """CLI tests bind the package logger to a captured stdout; detach it afterwards."""
    yield
    logging.getLogger("threshold_charts").handlers.clear()


def month_records(values: list[float]) -> list[dict[str, Any]]:
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    return [{"name": months[i % 12], "data1": v} for i, v in enumerate(values)]


def cartesian_chart(kind: str = "line", values: list[float] | None = None) -> Chart:
    """Unrendered line or column chart over a 0..100 left axis."""
    return Chart(
        series=[{"type": kind, "x_field": "name", "y_field": "data1", "axis": "left"}],
        axes=[
            Axis("left", fields=["data1"], minimum=0, maximum=100),
            Axis("bottom", type="category", fields=["name"]),
        ],
        records=month_records(values if values is not None else [20, 45, 80, 60, 35]),
    )


def radar_chart(values: list[float] | None = None, maximum: float | None = None) -> Chart:
    return Chart(
        series=[{"type": "radar", "x_field": "name", "y_field": "data1"}],
        axes=[Axis("radial", type="radial", fields=["data1"], minimum=0, maximum=maximum)],
        records=month_records(values if values is not None else [20, 45, 80, 60, 35]),
    )


def box_200x100() -> BoundingBox:
    return BoundingBox(x=0, y=0, width=200, height=100)
