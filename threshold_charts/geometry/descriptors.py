"""
Geometry value types shared by the bounds resolvers and path calculators.

A bounds descriptor is a tagged variant: ``kind`` tells the path calculators
which projection to use instead of probing the descriptor for attributes.
All coordinates are device units with y growing downwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .tokens import PathTokens


class BoundsKind(Enum):
    """Discriminant of a bounds descriptor."""

    UNIFORM = "uniform"
    PER_AXIS = "per_axis"
    RADIAL = "radial"


@dataclass(frozen=True)
class BoundingBox:
    """Plot area of a series in device units."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class PerAxisBounds:
    """Independent X and Y scales, as computed for line-style series."""

    bbox: BoundingBox
    min_x: float
    min_y: float
    x_scale: float
    y_scale: float
    kind: BoundsKind = BoundsKind.PER_AXIS


@dataclass(frozen=True)
class UniformBounds:
    """A single scale for both directions, as exposed by bar-style series."""

    bbox: BoundingBox
    scale: float
    kind: BoundsKind = BoundsKind.UNIFORM


@dataclass(frozen=True)
class RadialBounds:
    """Center, radius and value ceiling of a radar series."""

    bbox: BoundingBox
    radius: float
    center_x: float
    center_y: float
    max_value: float
    kind: BoundsKind = BoundsKind.RADIAL


LinearBounds = Union[PerAxisBounds, UniformBounds]
BoundsDescriptor = Union[PerAxisBounds, UniformBounds, RadialBounds]


@dataclass(frozen=True)
class PathResult:
    """A threshold line path and the device point it starts from."""

    path: PathTokens
    x: float
    y: float


@dataclass(frozen=True)
class CirclePath:
    """A threshold ring on a radar chart."""

    radius: float
    x: float
    y: float


@dataclass(frozen=True)
class TextSize:
    """Measured extent of a rendered text primitive."""

    width: float
    height: float


@dataclass(frozen=True)
class LabelPlacement:
    """Final label position; ``rotation`` is in degrees, clockwise on screen."""

    x: float
    y: float
    rotation: Optional[int] = None
