"""
Minimal host chart model.

This module provides the chart-side collaborators the decorations are drawn
against: axes that report their extrema, line/bar/radar series that carry
their laid-out geometry, a series collection that announces when a raw
series configuration is replaced by a live series, and the chart that ties
them to a data store and a drawing surface.

Series start life as plain configuration mappings inside the chart's
``SeriesCollection`` and become live ``Series`` objects when the renderer
instantiates them. Two notifications matter to decorations:

    SeriesCollection.on_replace  fired when a configuration becomes a live series
    Series.after_render          fired after every layout/draw of the series
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .geometry.descriptors import BoundingBox, UniformBounds

logger = logging.getLogger("threshold_charts.host")

Record = Mapping[str, Any]


class SeriesKind(Enum):
    """Series families the decorations know how to measure."""

    LINE = "line"
    BAR = "bar"
    RADAR = "radar"


class EventHook:
    """
    A small synchronous event source.

    Listeners are called in registration order. A listener registered with
    ``once=True`` is removed before it is called, so it fires exactly once.
    Exceptions raised by listeners propagate to the caller of ``emit``.
    """

    def __init__(self, name: str = "event"):
        self.name = name
        self._listeners: List[Tuple[Callable[..., Any], bool]] = []

    def connect(self, callback: Callable[..., Any], once: bool = False) -> Callable[..., Any]:
        self._listeners.append((callback, once))
        return callback

    def emit(self, *args: Any) -> None:
        listeners = list(self._listeners)
        self._listeners = [(cb, once) for cb, once in self._listeners if not once]
        for callback, _once in listeners:
            callback(*args)

    def __len__(self) -> int:
        return len(self._listeners)


@dataclass(frozen=True)
class AxisExtrema:
    """Computed ``from``/``to`` of an axis; NaN when the axis is not numeric."""

    from_: float
    to: float


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, Real) and not isinstance(value, bool):
        value = float(value)
        return None if math.isnan(value) else value
    return None


@dataclass
class Axis:
    """
    A chart axis.

    Attributes:
        position: Edge the axis is drawn on (left, right, top, bottom, radial)
        type: 'numeric', 'category' or 'radial'
        fields: Record fields the axis measures
        minimum: Explicit minimum; computed from the data when None
        maximum: Explicit maximum; computed from the data when None
        title: Axis title
    """

    position: str
    type: str = "numeric"
    fields: Sequence[str] = ()
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    title: str = ""

    @property
    def is_numeric(self) -> bool:
        return self.type in ("numeric", "radial")

    def apply_data(self, records: Sequence[Record]) -> AxisExtrema:
        """Compute the axis extrema for the given records."""
        if not self.is_numeric:
            return AxisExtrema(math.nan, math.nan)

        values = [
            v for v in (_numeric(record.get(name)) for record in records for name in self.fields)
            if v is not None
        ]
        lo = self.minimum if self.minimum is not None else (min(values) if values else math.nan)
        hi = self.maximum if self.maximum is not None else (max(values) if values else math.nan)
        return AxisExtrema(float(lo), float(hi))


class Series:
    """
    Base class of live series.

    The renderer sets ``bbox`` (and radar geometry) during layout, then
    fires ``after_render``.
    """

    kind: SeriesKind = SeriesKind.LINE

    def __init__(
        self,
        x_field: str,
        y_field: str,
        axis: str = "left",
        title: Optional[str] = None,
        color: Optional[str] = None,
    ):
        self.x_field = x_field
        self.y_field = y_field
        self.axis = axis
        self.title = title or y_field
        self.color = color
        self.chart: Optional["Chart"] = None
        self.bbox: Optional[BoundingBox] = None
        self.after_render = EventHook("after_render")

    @property
    def type(self) -> str:
        return self.kind.value

    def get_axes_for_x_and_y_fields(self) -> Tuple[Optional[str], Optional[str]]:
        """Return the positions of the axes measuring this series' x and y fields."""
        x_axis = y_axis = None
        if self.chart is None:
            return x_axis, y_axis
        for position, axis in self.chart.axes.items():
            if self.x_field in axis.fields and x_axis is None:
                x_axis = position
            if self.y_field in axis.fields and y_axis is None:
                y_axis = position
        return x_axis, y_axis

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x_field={self.x_field!r}, y_field={self.y_field!r})"


class LineSeries(Series):
    kind = SeriesKind.LINE


class BarSeries(Series):
    """
    Bar-style series; ``column=True`` draws vertical bars.

    Bar series measure themselves with a single value scale, exposed by
    ``get_bounds``.
    """

    kind = SeriesKind.BAR

    def __init__(self, x_field: str, y_field: str, axis: str = "left", column: bool = True, **kwargs: Any):
        super().__init__(x_field, y_field, axis=axis, **kwargs)
        self.column = column

    def get_bounds(self) -> UniformBounds:
        """Return the uniform-scale bounds of the laid-out bars."""
        if self.bbox is None or self.chart is None:
            raise ValueError("Series has not been laid out yet")
        axis = self.chart.axes.get(self.axis)
        extrema = axis.apply_data(self.chart.records) if axis is not None else AxisExtrema(math.nan, math.nan)
        if math.isnan(extrema.from_) or math.isnan(extrema.to):
            values = self.chart.values(self.y_field)
            lo, hi = min(values + [0.0]), max(values + [0.0])
        else:
            lo, hi = extrema.from_, extrema.to
        extent = self.bbox.height if self.column else self.bbox.width
        return UniformBounds(bbox=self.bbox, scale=extent / ((hi - lo) or 1))


class RadarSeries(Series):
    """Radar series; center and radius are set by the renderer's layout."""

    kind = SeriesKind.RADAR

    def __init__(self, x_field: str, y_field: str, **kwargs: Any):
        kwargs.setdefault("axis", "radial")
        super().__init__(x_field, y_field, **kwargs)
        self.radius: float = 0.0
        self.center_x: float = 0.0
        self.center_y: float = 0.0


SERIES_TYPES: Dict[str, type] = {
    "line": LineSeries,
    "bar": BarSeries,
    "column": BarSeries,
    "radar": RadarSeries,
}

SeriesItem = Union[Series, Mapping[str, Any]]


def create_series(config: Mapping[str, Any]) -> Series:
    """Instantiate a live series from its configuration mapping."""
    config = dict(config)
    series_type = config.pop("type", "line")
    if series_type not in SERIES_TYPES:
        raise ValueError(f"Unknown series type: {series_type!r}")
    if series_type == "bar":
        config.setdefault("column", False)
    return SERIES_TYPES[series_type](**config)


class SeriesCollection:
    """
    Ordered series of a chart; items are raw configurations or live series.

    ``on_replace`` is emitted with ``(index, old, new)`` when an item is
    replaced, which is how a chart announces a newly instantiated series.
    """

    def __init__(self, items: Optional[Sequence[SeriesItem]] = None):
        self._items: List[SeriesItem] = list(items or ())
        self.on_replace = EventHook("replace")

    def first(self) -> Optional[SeriesItem]:
        return self._items[0] if self._items else None

    def replace(self, index: int, item: SeriesItem) -> None:
        old = self._items[index]
        self._items[index] = item
        self.on_replace.emit(index, old, item)

    @property
    def items(self) -> List[SeriesItem]:
        return list(self._items)

    def __iter__(self) -> Iterator[SeriesItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> SeriesItem:
        return self._items[index]


class Chart:
    """
    A chart: axes keyed by position, a series collection and a data store.

    ``surface`` is attached by the renderer; decorations read it from the
    chart on every pass.
    """

    def __init__(
        self,
        series: Sequence[SeriesItem],
        axes: Sequence[Axis] = (),
        records: Optional[Sequence[Record]] = None,
        title: str = "",
        inset_padding: float = 20.0,
    ):
        self.series = SeriesCollection(series)
        self.axes: Dict[str, Axis] = {axis.position: axis for axis in axes}
        self.records: List[Record] = list(records or ())
        self.title = title
        self.inset_padding = inset_padding
        self.surface: Any = None
        self.plugins: List[Any] = []

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def is_radial(self) -> bool:
        first = self.series.first()
        if isinstance(first, Series):
            return first.kind is SeriesKind.RADAR
        if isinstance(first, Mapping):
            return first.get("type") == "radar"
        return False

    def values(self, name: str) -> List[float]:
        """Numeric values of a field across all records."""
        return [v for v in (_numeric(record.get(name)) for record in self.records) if v is not None]

    def load_data(self, records: Sequence[Record]) -> None:
        """Replace the data store; the renderer redraws on the next render."""
        self.records = list(records)
        logger.info(f"Chart data reloaded: {len(self.records)} records")

    def add_plugin(self, plugin: Any) -> Any:
        """Attach a plugin exposing ``attach(chart)`` and keep a reference to it."""
        plugin.attach(self)
        self.plugins.append(plugin)
        return plugin
