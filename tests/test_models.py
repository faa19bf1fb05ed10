from __future__ import annotations

import math

import pytest

from threshold_charts.constants import DEFAULT_LINE_DASH, DEFAULT_LINE_WIDTH, DEFAULT_RANGE_OPACITY
from threshold_charts.exceptions import InvalidConfigurationError
from threshold_charts.models import (
    LineSpec,
    RangeSpec,
    line_to_dict,
    parse_lines,
    parse_ranges,
    range_to_dict,
)


def test_line_from_dict_applies_defaults() -> None:
    line = LineSpec.from_dict({"value": 30})

    assert line.position == "left"
    assert line.width == DEFAULT_LINE_WIDTH
    assert line.dash == DEFAULT_LINE_DASH
    assert line.label.text == ""
    assert line.label.show_value is True


def test_line_from_dict_accepts_camel_case_keys() -> None:
    line = LineSpec.from_dict({
        "value": 70,
        "position": "right",
        "dashPattern": "4,4",
        "label": {"text": "Goal", "showValue": False},
    })

    assert line.dash == "4,4"
    assert line.label.show_value is False


def test_zero_width_falls_back_to_default() -> None:
    assert LineSpec.from_dict({"value": 1, "width": 0}).width == DEFAULT_LINE_WIDTH


@pytest.mark.parametrize(
    "data",
    [
        {"value": 10, "position": "middle"},
        {"value": "ten"},
        {"value": math.nan},
        {"value": True},
        {"value": 10, "width": -1},
        {"value": 10, "opacity": 1.5},
        {"position": "left"},
    ],
)
def test_invalid_lines_fail_fast(data: dict) -> None:
    with pytest.raises(InvalidConfigurationError):
        LineSpec.from_dict(data)


def test_range_from_dict_reads_plain_from_key() -> None:
    band = RangeSpec.from_dict({"from": 70, "to": 90, "color": "#FFFF00"})

    assert (band.from_, band.to) == (70, 90)
    assert band.opacity == DEFAULT_RANGE_OPACITY
    assert band.line_width == 1


@pytest.mark.parametrize(
    "data",
    [
        {"to": 10},
        {"from": 0},
        {"from": "low", "to": 10},
        {"from": 0, "to": 10, "opacity": -0.1},
        {"from": 0, "to": 10, "lineWidth": -2},
    ],
)
def test_invalid_ranges_fail_fast(data: dict) -> None:
    with pytest.raises(InvalidConfigurationError):
        RangeSpec.from_dict(data)


def test_parse_rejects_non_mapping_items() -> None:
    with pytest.raises(InvalidConfigurationError):
        parse_lines([30])
    with pytest.raises(InvalidConfigurationError):
        parse_ranges(["0-10"])


def test_parse_keeps_order_and_existing_specs() -> None:
    existing = LineSpec(value=5)

    lines = parse_lines([{"value": 1}, existing, {"value": 3}])

    assert [line.value for line in lines] == [1, 5, 3]
    assert lines[1] is existing


def test_dict_forms_rebuild_equal_specs() -> None:
    line = LineSpec.from_dict({"value": 70, "position": "top", "label": {"text": "T"}})
    band = RangeSpec(from_=0, to=50, color="#FF0000")

    assert LineSpec.from_dict(line_to_dict(line)) == line
    assert RangeSpec.from_dict(range_to_dict(band)) == band


def test_specs_are_immutable() -> None:
    line = LineSpec(value=5)

    with pytest.raises(AttributeError):
        line.value = 6
