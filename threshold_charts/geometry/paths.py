"""
Device-space paths for threshold lines and ranges.

Pure functions mapping a bounds descriptor and a line/range configuration to
path tokens (see ``tokens``) or circle descriptors. Device y grows
downwards, so larger values sit higher on the chart:

    y = box.y + box.height - (value - min_y) * y_scale
    x = box.x + (value - min_x) * x_scale
"""

import math
from typing import Tuple

from ..constants import (
    DEFAULT_RANGE_LINE_WIDTH,
    FULL_CIRCLE_ARC_EPSILON,
    POSITION_BOTTOM,
    POSITION_LEFT,
    POSITION_RIGHT,
    POSITION_TOP,
)
from ..models import LineSpec, RangeSpec, validate_position
from .descriptors import BoundsKind, CirclePath, LinearBounds, PathResult, RadialBounds
from .tokens import PathTokens

# The ring is placed at a fixed angle; see radar_line_path
RADAR_LINE_ANGLE = 0.0


def _linear_transform(bounds: LinearBounds) -> Tuple[float, float, float, float]:
    """Return ``(x_scale, y_scale, min_x, min_y)`` with the uniform/unit fallbacks applied."""
    if bounds.kind is BoundsKind.PER_AXIS:
        x_scale = bounds.x_scale or 1
        y_scale = bounds.y_scale or 1
        return x_scale, y_scale, bounds.min_x or 0, bounds.min_y or 0
    if bounds.kind is BoundsKind.UNIFORM:
        scale = bounds.scale or 1
        return scale, scale, 0, 0
    raise ValueError(f"Cartesian paths need linear bounds, got {bounds.kind}")


def cartesian_line_path(bounds: LinearBounds, line: LineSpec) -> PathResult:
    """
    Calculate the path of a threshold line on a cartesian chart.

    Lines starting from the left or right edge are horizontal and span the
    box width; lines starting from the top or bottom edge are vertical and
    span the box height.

    Args:
        bounds: Linear bounds of the series
        line: Line configuration

    Returns:
        PathResult with the tokens and the line's start point

    Example:
        >>> bbox = BoundingBox(0, 0, 200, 100)
        >>> bounds = PerAxisBounds(bbox, min_x=0, min_y=0, x_scale=2, y_scale=1)
        >>> cartesian_line_path(bounds, LineSpec(value=30)).path
        (('M', 0, 70), ('l', 200, 0))
    """
    position = validate_position(line.position)
    x_scale, y_scale, min_x, min_y = _linear_transform(bounds)
    box = bounds.bbox
    value = line.value

    if position == POSITION_LEFT:
        x = box.x
        y = box.y + box.height - (value - min_y) * y_scale
        path = (("M", x, y), ("l", box.width, 0))
    elif position == POSITION_RIGHT:
        x = box.x + box.width
        y = box.y + box.height - (value - min_y) * y_scale
        path = (("M", x, y), ("l", -box.width, 0))
    elif position == POSITION_BOTTOM:
        y = box.y + box.height
        x = box.x + (value - min_x) * x_scale
        path = (("M", x, y), ("l", 0, -box.height))
    else:
        y = box.y
        x = box.x + (value - min_x) * x_scale
        path = (("M", x, y), ("l", 0, box.height))

    return PathResult(path=path, x=x, y=y)


def radar_line_path(bounds: RadialBounds, line: LineSpec) -> CirclePath:
    """
    Calculate the threshold ring of a radar chart.

    The ring is concentric with the series and its radius is proportional
    to ``line.value / max_value``. Its anchor is taken at a single fixed
    angle, so the ring marks one radial distance rather than tracing each
    category axis.
    """
    rho = bounds.radius * line.value / bounds.max_value
    y = rho * math.sin(RADAR_LINE_ANGLE)
    return CirclePath(radius=rho, x=bounds.center_x, y=bounds.center_y + y)


def range_path(position: str, bounds: LinearBounds, band: RangeSpec) -> PathTokens:
    """
    Calculate the closed quadrilateral of a shaded range.

    The band spans ``from_``..``to`` along the axis at ``position`` and the
    full perpendicular extent of the box. Every edge is inset by half of the
    range's line width so the stroke stays inside the value band. Corners
    start at the ``from`` edge.

    Args:
        position: Position of the series' bound axis
        bounds: Linear bounds of the series
        band: Range configuration

    Returns:
        Path tokens (moveto, three linetos, close)
    """
    position = validate_position(position)
    x_scale, y_scale, min_x, min_y = _linear_transform(bounds)
    box = bounds.bbox
    inset = (band.line_width or DEFAULT_RANGE_LINE_WIDTH) / 2

    if position in (POSITION_LEFT, POSITION_RIGHT):
        from_y = box.y + box.height - (band.from_ - min_y) * y_scale
        to_y = box.y + box.height - (band.to - min_y) * y_scale
        if position == POSITION_LEFT:
            near, far = box.x + inset, box.x + box.width - inset
        else:
            near, far = box.x + box.width - inset, box.x + inset
        return (
            ("M", near, from_y - inset),
            ("L", far, from_y - inset),
            ("L", far, to_y + inset),
            ("L", near, to_y + inset),
            ("Z",),
        )

    from_x = box.x + (band.from_ - min_x) * x_scale
    to_x = box.x + (band.to - min_x) * x_scale
    if position == POSITION_TOP:
        near, far = box.y + inset, box.y + box.height - inset
    else:
        near, far = box.y + box.height - inset, box.y + inset
    return (
        ("M", from_x + inset, near),
        ("L", from_x + inset, far),
        ("L", to_x - inset, far),
        ("L", to_x - inset, near),
        ("Z",),
    )


def radial_range_path(bounds: RadialBounds, band: RangeSpec) -> PathTokens:
    """
    Calculate the annulus of a shaded range on a radar chart.

    Two concentric full circles are drawn with opposite sweeps so that a
    nonzero fill leaves the inner disk empty. ``to`` is capped at the chart's
    value ceiling; when the inner radius is 0 only the outer circle is drawn.
    """
    cx, cy = bounds.center_x, bounds.center_y
    max_value = bounds.max_value
    to = min(band.to, max_value)
    outer = bounds.radius * to / max_value
    inner = bounds.radius * band.from_ / max_value

    path = (
        ("M", cx, cy + outer),
        ("A", outer, outer, 0, 1, 1, cx + FULL_CIRCLE_ARC_EPSILON, cy + outer),
    )
    if inner > 0:
        path += (
            ("M", cx, cy + inner),
            ("A", inner, inner, 0, 1, 0, cx - FULL_CIRCLE_ARC_EPSILON, cy + inner),
        )
    return path
