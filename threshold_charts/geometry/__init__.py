"""
Decoration geometry for ThresholdCharts.

This subpackage maps axis values onto device coordinates:
- Path tokens and their conversion to SVG strings and matplotlib paths
- Bounds descriptors (per-axis, uniform and radial)
- Path calculation for threshold lines, rings, ranges and radial bands

Bounds resolution lives in ``threshold_charts.geometry.bounds``; it reads
the host chart model, so it is imported from there rather than re-exported
here (the host model itself depends on the descriptors below).

Example:
    >>> from threshold_charts.geometry import BoundingBox, PerAxisBounds, cartesian_line_path
    >>> from threshold_charts.models import LineSpec
    >>>
    >>> bounds = PerAxisBounds(BoundingBox(0, 0, 200, 100), min_x=0, min_y=0, x_scale=2, y_scale=1)
    >>> cartesian_line_path(bounds, LineSpec(position="left", value=30)).y
    70
"""

from .descriptors import (
    BoundingBox,
    BoundsKind,
    CirclePath,
    LabelPlacement,
    PathResult,
    PerAxisBounds,
    RadialBounds,
    TextSize,
    UniformBounds,
)
from .paths import (
    cartesian_line_path,
    radar_line_path,
    radial_range_path,
    range_path,
)
from .tokens import absolute_vertices, polygon_area, to_mpl_path, to_svg

__all__ = [
    "BoundingBox",
    "BoundsKind",
    "CirclePath",
    "LabelPlacement",
    "PathResult",
    "PerAxisBounds",
    "RadialBounds",
    "TextSize",
    "UniformBounds",
    "cartesian_line_path",
    "radar_line_path",
    "radial_range_path",
    "range_path",
    "absolute_vertices",
    "polygon_area",
    "to_mpl_path",
    "to_svg",
]
