"""
Create-or-update synchronisation of decoration primitives.

Every decoration owns the primitive at its index in a surface group. The
first pass creates it with its full styling; later passes only move it
(path, center, radius, position) and unhide it. Styling (stroke color,
width, dash pattern, fill, opacity) is applied at creation only, so changing
a spec's style after the first render has no visible effect until the
primitive is destroyed.
"""

import logging
from typing import Any, Dict, Mapping

from ..constants import (
    DEFAULT_LINE_COLOR,
    DEFAULT_LINE_DASH,
    DEFAULT_LINE_OPACITY,
    DEFAULT_LINE_WIDTH,
    DEFAULT_RANGE_OPACITY,
    POSITION_LEFT,
    RANGE_ZORDER,
    THRESHOLD_LABEL_ZORDER,
    THRESHOLD_LINE_ZORDER,
)
from ..geometry.descriptors import CirclePath, PathResult
from ..geometry.tokens import PathTokens
from ..models import LineSpec, RangeSpec
from .labels import compose_label_text, label_rotation, place_label

logger = logging.getLogger("threshold_charts.rendering.primitives")


def sync_primitive(
    surface: Any,
    kind: str,
    group: Any,
    index: int,
    creation_attributes: Mapping[str, Any],
    mutable_attributes: Mapping[str, Any],
) -> Any:
    """
    Return the primitive at ``(group, index)``, creating it if needed.

    A new primitive receives both attribute sets; an existing one only
    receives ``mutable_attributes``. Either way the primitive is unhidden
    and redrawn.

    Args:
        surface: Drawing surface
        kind: Primitive kind ('path', 'circle' or 'text')
        group: Surface group holding the primitive
        index: Position of the decoration in its configuration sequence
        creation_attributes: Styling applied once at creation
        mutable_attributes: Geometry applied on every pass

    Returns:
        Handle of the primitive
    """
    handle = surface.get_at(group, index)
    if handle is None:
        handle = surface.add(kind, group, **dict(creation_attributes), **dict(mutable_attributes))
        logger.debug(f"Created {kind} #{index}")
    surface.set_attributes(handle, {"hidden": False, **dict(mutable_attributes)}, True)
    return handle


def _line_style(line: LineSpec) -> Dict[str, Any]:
    return {
        "opacity": line.opacity or DEFAULT_LINE_OPACITY,
        "stroke_width": line.width or DEFAULT_LINE_WIDTH,
        "stroke": line.color or DEFAULT_LINE_COLOR,
        "stroke_dasharray": line.dash or DEFAULT_LINE_DASH,
        "zindex": THRESHOLD_LINE_ZORDER,
    }


def sync_threshold_line(surface: Any, group: Any, index: int, result: PathResult, line: LineSpec) -> Any:
    """Draw or move a cartesian threshold line."""
    return sync_primitive(surface, "path", group, index, _line_style(line), {"path": result.path})


def sync_threshold_circle(surface: Any, group: Any, index: int, circle: CirclePath, line: LineSpec) -> Any:
    """Draw or move a radar threshold ring."""
    return sync_primitive(
        surface, "circle", group, index,
        _line_style(line),
        {"x": circle.x, "y": circle.y, "radius": circle.radius},
    )


def sync_range(surface: Any, group: Any, index: int, path: PathTokens, band: RangeSpec) -> Any:
    """Draw or move a shaded range behind the series."""
    creation = {
        "opacity": band.opacity or DEFAULT_RANGE_OPACITY,
        "zindex": RANGE_ZORDER,
        "fill": band.color,
    }
    return sync_primitive(surface, "path", group, index, creation, {"path": path})


def sync_label(surface: Any, group: Any, index: int, anchor_x: float, anchor_y: float, line: LineSpec) -> Any:
    """
    Draw or move the label of a threshold line.

    A new label is added at the origin with its final text, font and
    rotation so it can be measured; the text is composed only at creation.
    The measured size then decides the final position on every pass.
    """
    position = line.position or POSITION_LEFT
    handle = surface.get_at(group, index)
    if handle is None:
        handle = surface.add(
            "text",
            group,
            x=0,
            y=0,
            text=compose_label_text(line),
            color=line.label.color,
            font=line.label.font,
            rotation=label_rotation(position),
            zindex=THRESHOLD_LABEL_ZORDER,
        )
        logger.debug(f"Created label #{index}")

    size = surface.measure_text(handle)
    placement = place_label(anchor_x, anchor_y, position, size)
    surface.set_attributes(handle, {"hidden": False, "x": placement.x, "y": placement.y}, True)
    return handle
