"""
Bounds resolution for rendered series.

A bounds descriptor normalizes what a series knows about its layout into
the handful of facts needed to map axis values to device coordinates:

    line series   bbox + per-axis minimum and scale      (PerAxisBounds)
    bar series    bbox + one uniform scale                (UniformBounds)
    radar series  bbox + center, radius and value ceiling (RadialBounds)

Descriptors are recomputed from scratch on every render pass; nothing is
carried over between passes.
"""

import logging
import math
from typing import Optional, Tuple

from ..host import Chart, Series, SeriesKind
from .descriptors import BoundsDescriptor, LinearBounds, PerAxisBounds, RadialBounds

logger = logging.getLogger("threshold_charts.geometry.bounds")


def _axis_extrema(chart: Chart, position: Optional[str]) -> Tuple[float, float]:
    axis = chart.axes.get(position) if position is not None else None
    if axis is None:
        return math.nan, math.nan
    extrema = axis.apply_data(chart.records)
    return extrema.from_, extrema.to


def _axis_scale(extent: float, lo: float, hi: float, record_count: int) -> Tuple[float, float]:
    """
    Return ``(minimum, scale)`` for one axis.

    A non-numeric minimum means no numeric axis governs the dimension, so the
    records are spread evenly over it starting from 0. Otherwise the scale
    divides by the first non-zero of the extrema span, ``record_count - 1``
    and 1.
    """
    spread = max(record_count - 1, 0)
    if math.isnan(lo):
        return 0.0, extent / (spread or 1)
    span = hi - lo
    if math.isnan(span):
        span = 0
    return lo, extent / (span or spread or 1)


def resolve_linear_bounds(series: Series, chart: Chart) -> LinearBounds:
    """
    Calculate the bounds of a cartesian series.

    Bar-style series report their own uniform-scale bounds, which take
    precedence. Other series are measured per axis from the axes bound to
    their x and y fields.

    Args:
        series: Laid-out series (its ``bbox`` must be set)
        chart: Chart owning the series, its axes and records

    Returns:
        UniformBounds for bar series, PerAxisBounds otherwise

    Example:
        >>> bounds = resolve_linear_bounds(series, chart)
        >>> bounds.kind
        <BoundsKind.PER_AXIS: 'per_axis'>
    """
    if series.kind is SeriesKind.BAR:
        return series.get_bounds()

    bbox = series.bbox
    if bbox is None:
        raise ValueError(f"{series!r} has no bounding box; it has not been laid out")

    record_count = chart.record_count
    x_axis, y_axis = series.get_axes_for_x_and_y_fields()
    min_x, max_x = _axis_extrema(chart, x_axis)
    min_y, max_y = _axis_extrema(chart, y_axis)

    min_x, x_scale = _axis_scale(bbox.width, min_x, max_x, record_count)
    min_y, y_scale = _axis_scale(bbox.height, min_y, max_y, record_count)

    logger.debug(
        f"Linear bounds: bbox={bbox}, min=({min_x}, {min_y}), scale=({x_scale:.4f}, {y_scale:.4f})"
    )
    return PerAxisBounds(bbox=bbox, min_x=min_x, min_y=min_y, x_scale=x_scale, y_scale=y_scale)


def aggregate_max_value(chart: Chart) -> float:
    """
    Largest value of any series' y-field across all records.

    Returns 0 when there is nothing numeric to aggregate.
    """
    fields = []
    for item in chart.series:
        name = item.y_field if isinstance(item, Series) else item.get("y_field")
        if name and name not in fields:
            fields.append(name)

    max_value = 0.0
    for name in fields:
        values = chart.values(name)
        if values:
            max_value = max(max_value, max(values))
    return max_value


def resolve_radial_max_value(chart: Chart) -> float:
    """
    Value ceiling of a radar chart.

    An explicit maximum on the chart's radial axis wins; otherwise the
    maximum observed value is used. The result is never below 1.
    """
    axis = chart.axes.get("radial")
    if axis is not None and axis.maximum:
        max_value = float(axis.maximum)
    else:
        max_value = aggregate_max_value(chart)
    return max(max_value, 1.0)


def resolve_radial_bounds(series: Series, chart: Chart) -> RadialBounds:
    """
    Calculate the bounds of a radar series.

    Args:
        series: Laid-out radar series (center and radius set)
        chart: Chart owning the series

    Returns:
        RadialBounds with the series geometry and value ceiling
    """
    max_value = resolve_radial_max_value(chart)
    logger.debug(
        f"Radial bounds: center=({series.center_x}, {series.center_y}), "
        f"radius={series.radius}, max_value={max_value}"
    )
    return RadialBounds(
        bbox=series.bbox,
        radius=series.radius,
        center_x=series.center_x,
        center_y=series.center_y,
        max_value=max_value,
    )


def resolve_bounds(series: Series, chart: Chart) -> BoundsDescriptor:
    """Radial bounds for radar series, linear bounds for everything else."""
    if series.kind is SeriesKind.RADAR:
        return resolve_radial_bounds(series, chart)
    return resolve_linear_bounds(series, chart)
