"""
Rendering subsystem for ThresholdCharts.

This module draws charts and their decorations on a matplotlib canvas. It
separates the drawing surface (persistent, indexable primitives in named
groups) from the chart orchestration and from the decoration helpers that
keep one primitive per threshold line, label and range.

Main Classes:
    MatplotlibSurface: Agg-backed surface in device pixels (y grows downwards)
    ChartRenderer: Lays out and draws a host chart, then fires after-render

Key Features:
    - Path, circle and text primitives addressed by (group, index)
    - SVG-style path tokens (including elliptical arcs) drawn as patches
    - CSS-style font strings and dash arrays
    - Text measurement for two-phase label placement
    - Create-or-update primitive sync across render passes

Coordinate System:
    - Device pixels, origin at the top-left corner of the canvas
    - Larger y values are lower on the image

Example:
    >>> from threshold_charts.rendering import MatplotlibSurface
    >>>
    >>> surface = MatplotlibSurface(400, 300)
    >>> group = surface.get_group("thresholdlines")
    >>> line = surface.add("path", group, path=(("M", 20, 150), ("l", 360, 0)), stroke="#000")
    >>> surface.save("line.png")
"""

from .surface import (
    MatplotlibSurface,
    Primitive,
    PrimitiveGroup,
    Surface,
    parse_css_font,
    parse_dash_array,
)
from .labels import compose_label_text, format_value, label_rotation, place_label
from .primitives import (
    sync_label,
    sync_primitive,
    sync_range,
    sync_threshold_circle,
    sync_threshold_line,
)
from .chart import ChartRenderer

__all__ = [
    "MatplotlibSurface",
    "Primitive",
    "PrimitiveGroup",
    "Surface",
    "parse_css_font",
    "parse_dash_array",
    "compose_label_text",
    "format_value",
    "label_rotation",
    "place_label",
    "sync_label",
    "sync_primitive",
    "sync_range",
    "sync_threshold_circle",
    "sync_threshold_line",
    "ChartRenderer",
]
