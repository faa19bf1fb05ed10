"""
Label text and placement for threshold lines.

Labels are placed in two phases: the text is first added to the surface at
the origin with its final content and font, then measured, then moved next
to the line. The offsets below depend on the measured size, so they cannot
be computed before the text exists on the surface.
"""

from numbers import Integral
from typing import Optional

from ..constants import (
    LABEL_PAD,
    LABEL_ROTATION,
    POSITION_BOTTOM,
    POSITION_LEFT,
    POSITION_TOP,
)
from ..geometry.descriptors import LabelPlacement, TextSize
from ..models import LineSpec


def format_value(value: float) -> str:
    """Format a line value the way it reads in a label: ``30`` rather than ``30.0``."""
    if isinstance(value, Integral):
        return str(value)
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def compose_label_text(line: LineSpec) -> str:
    """Label text, with `` (value)`` appended when the label shows the value."""
    text = line.label.text
    if line.label.show_value:
        text = f"{text} ({format_value(line.value)})"
    return text


def label_rotation(position: str) -> Optional[int]:
    """Clockwise rotation in degrees for labels of vertical lines, None otherwise."""
    return LABEL_ROTATION.get(position)


def place_label(
    anchor_x: float,
    anchor_y: float,
    position: str,
    size: TextSize,
    pad: float = LABEL_PAD,
) -> LabelPlacement:
    """
    Position a measured label next to the start of its line.

    Args:
        anchor_x: X of the point the line starts from
        anchor_y: Y of the point the line starts from
        position: Axis position of the line (left, right, top, bottom)
        size: Measured width and height of the rendered label text
        pad: Gap between the line and the label in device units

    Returns:
        LabelPlacement with the text position and rotation

    Example:
        >>> place_label(0, 70, "left", TextSize(width=40, height=12))
        LabelPlacement(x=5, y=64.0, rotation=None)
    """
    width, height = size.width, size.height
    if position == POSITION_TOP:
        x = anchor_x - pad - height / 2 + width
        y = anchor_y + pad + height / 2
    elif position == POSITION_BOTTOM:
        y = anchor_y - pad - height / 2
        x = anchor_x - width / 2 - height / 2
    elif position == POSITION_LEFT:
        x = anchor_x + pad
        y = anchor_y - height / 2
    else:
        x = anchor_x - width - pad
        y = anchor_y - height / 2
    return LabelPlacement(x=x, y=y, rotation=label_rotation(position))
