"""
Decoration configuration models.

Threshold lines, their labels and shaded ranges are described by frozen
dataclasses. They are built once at configuration time and read-only for the
lifetime of the controller that draws them; the index of a spec in its
sequence is its identity on the drawing surface.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .constants import (
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_FONT,
    DEFAULT_LABEL_SHOW_VALUE,
    DEFAULT_LABEL_TEXT,
    DEFAULT_LINE_COLOR,
    DEFAULT_LINE_DASH,
    DEFAULT_LINE_OPACITY,
    DEFAULT_LINE_WIDTH,
    DEFAULT_RANGE_LINE_WIDTH,
    DEFAULT_RANGE_OPACITY,
    LINE_POSITIONS,
    POSITION_LEFT,
)
from .exceptions import InvalidConfigurationError


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def _pick(data: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first key present in ``data`` (snake_case or camelCase spelling)."""
    for name in names:
        if name in data and data[name] is not None:
            return data[name]
    return default


def _check_opacity(opacity: Any, owner: str) -> None:
    if not _is_number(opacity) or not (0.0 <= float(opacity) <= 1.0):
        raise InvalidConfigurationError(f"{owner} opacity must be a number in [0, 1], got {opacity!r}")


def _check_width(width: Any, owner: str) -> None:
    if not _is_number(width) or width < 0:
        raise InvalidConfigurationError(f"{owner} width must be a non-negative number, got {width!r}")


def validate_position(position: Any) -> str:
    """
    Validate an axis position.

    Args:
        position: Position name to check

    Returns:
        The validated position

    Raises:
        InvalidConfigurationError: If the position is not one of left/right/top/bottom
    """
    if position not in LINE_POSITIONS:
        available = ", ".join(LINE_POSITIONS)
        raise InvalidConfigurationError(
            f"Invalid position: {position!r}. Available positions: {available}"
        )
    return position


@dataclass(frozen=True)
class LabelSpec:
    """Text shown next to a threshold line."""

    text: str = DEFAULT_LABEL_TEXT
    color: str = DEFAULT_LABEL_COLOR
    font: str = DEFAULT_LABEL_FONT
    show_value: bool = DEFAULT_LABEL_SHOW_VALUE

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LabelSpec":
        if not data:
            return cls()
        return cls(
            text=str(_pick(data, "text", default=DEFAULT_LABEL_TEXT)),
            color=_pick(data, "color", default=DEFAULT_LABEL_COLOR),
            font=_pick(data, "font", default=DEFAULT_LABEL_FONT),
            show_value=bool(_pick(data, "show_value", "showValue", default=DEFAULT_LABEL_SHOW_VALUE)),
        )


@dataclass(frozen=True)
class LineSpec:
    """
    A threshold line drawn across the plot area at a fixed axis value.

    Attributes:
        value: Axis value the line is drawn at
        position: Axis edge the line starts from (left, right, top, bottom)
        color: Stroke color
        width: Stroke width in device units
        opacity: Stroke opacity in [0, 1]
        dash: Dash pattern as a comma separated "dash, gap" string
        label: Label configuration
    """

    value: float
    position: str = POSITION_LEFT
    color: str = DEFAULT_LINE_COLOR
    width: float = DEFAULT_LINE_WIDTH
    opacity: float = DEFAULT_LINE_OPACITY
    dash: str = DEFAULT_LINE_DASH
    label: LabelSpec = field(default_factory=LabelSpec)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfigurationError if the line cannot be drawn."""
        validate_position(self.position)
        if not _is_number(self.value):
            raise InvalidConfigurationError(f"Line value must be a number, got {self.value!r}")
        _check_width(self.width, "Line")
        _check_opacity(self.opacity, "Line")
        if not isinstance(self.label, LabelSpec):
            raise InvalidConfigurationError("Line label must be a LabelSpec")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineSpec":
        """
        Build a line from a plain mapping such as a parsed YAML entry.

        Missing optional keys fall back to the package defaults. A falsy
        ``width``/``opacity`` falls back to the default as well.
        """
        if "value" not in data:
            raise InvalidConfigurationError(f"Line configuration requires a 'value': {dict(data)!r}")
        return cls(
            value=data["value"],
            position=_pick(data, "position", default=POSITION_LEFT),
            color=_pick(data, "color", default=DEFAULT_LINE_COLOR),
            width=_pick(data, "width", default=DEFAULT_LINE_WIDTH) or DEFAULT_LINE_WIDTH,
            opacity=_pick(data, "opacity", default=DEFAULT_LINE_OPACITY) or DEFAULT_LINE_OPACITY,
            dash=str(_pick(data, "dash", "dash_pattern", "dashPattern", default=DEFAULT_LINE_DASH)),
            label=LabelSpec.from_dict(data.get("label")),
        )


@dataclass(frozen=True)
class RangeSpec:
    """
    A shaded band between two axis values.

    ``from_`` carries the lower edge since ``from`` is a Python keyword; the
    mapping form uses the plain ``from`` key.
    """

    from_: float
    to: float
    color: Optional[str] = None
    opacity: float = DEFAULT_RANGE_OPACITY
    line_width: float = DEFAULT_RANGE_LINE_WIDTH

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfigurationError if the range cannot be drawn."""
        if not _is_number(self.from_) or not _is_number(self.to):
            raise InvalidConfigurationError(
                f"Range bounds must be numbers, got from={self.from_!r} to={self.to!r}"
            )
        _check_width(self.line_width, "Range line")
        _check_opacity(self.opacity, "Range")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RangeSpec":
        if "from" not in data and "from_" not in data:
            raise InvalidConfigurationError(f"Range configuration requires 'from': {dict(data)!r}")
        if "to" not in data:
            raise InvalidConfigurationError(f"Range configuration requires 'to': {dict(data)!r}")
        return cls(
            from_=_pick(data, "from", "from_"),
            to=data["to"],
            color=data.get("color"),
            opacity=_pick(data, "opacity", default=DEFAULT_RANGE_OPACITY) or DEFAULT_RANGE_OPACITY,
            line_width=_pick(data, "line_width", "lineWidth", default=DEFAULT_RANGE_LINE_WIDTH)
            or DEFAULT_RANGE_LINE_WIDTH,
        )


def parse_lines(items: Optional[Sequence[Any]]) -> List[LineSpec]:
    """Convert a sequence of mappings and/or LineSpec objects into LineSpecs."""
    lines = []
    for index, item in enumerate(items or ()):
        if isinstance(item, LineSpec):
            lines.append(item)
        elif isinstance(item, Mapping):
            lines.append(LineSpec.from_dict(item))
        else:
            raise InvalidConfigurationError(f"Line #{index} must be a mapping or LineSpec, got {type(item).__name__}")
    return lines


def parse_ranges(items: Optional[Sequence[Any]]) -> List[RangeSpec]:
    """Convert a sequence of mappings and/or RangeSpec objects into RangeSpecs."""
    ranges = []
    for index, item in enumerate(items or ()):
        if isinstance(item, RangeSpec):
            ranges.append(item)
        elif isinstance(item, Mapping):
            ranges.append(RangeSpec.from_dict(item))
        else:
            raise InvalidConfigurationError(f"Range #{index} must be a mapping or RangeSpec, got {type(item).__name__}")
    return ranges


def line_to_dict(line: LineSpec) -> Dict[str, Any]:
    """Serialise a line back to its mapping form (used when saving decorations)."""
    return {
        "position": line.position,
        "value": line.value,
        "color": line.color,
        "width": line.width,
        "opacity": line.opacity,
        "dash": line.dash,
        "label": {
            "text": line.label.text,
            "color": line.label.color,
            "font": line.label.font,
            "show_value": line.label.show_value,
        },
    }


def range_to_dict(band: RangeSpec) -> Dict[str, Any]:
    return {
        "from": band.from_,
        "to": band.to,
        "color": band.color,
        "opacity": band.opacity,
        "line_width": band.line_width,
    }
