"""
Axis-aligned shapes used for chunk bounds and level bounds.

Two predicates decide whether a placement is legal:
- contains: full encompassment, inclusive comparisons (touching the boundary counts)
- intersects: partial overlap, exclusive comparisons (touching edges do NOT count)

A shape contains another shape that only touches its boundary, but two shapes
that only share a boundary do not intersect. Chunks stitched together at a
context touch along one face, so they must never be reported as intersecting.

Overlap is measured per axis as min(max) - max(min). A zero-extent shape therefore
has no positive overlap with anything, itself included.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from ..errors import InvalidArgument

# Slack for coordinates that drift by a few ulps when placements are computed
EPSILON = 1e-9


def _axis_overlap(a_min: float, a_len: float, b_min: float, b_len: float) -> float:
    """Length of the overlap of two intervals (may be negative)."""
    return min(a_min + a_len, b_min + b_len) - max(a_min, b_min)


def _axis_within(a_min: float, a_len: float, b_min: float, b_len: float) -> bool:
    """True if interval b lies within interval a, boundaries included."""
    return a_min <= b_min and a_min + a_len >= b_min + b_len


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with a 2D position (min corner) and extent."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidArgument(
                f"Rectangle extents must be non-negative, got ({self.width}, {self.height})"
            )

    @property
    def dimensions(self) -> int:
        return 2

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def extent(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def size(self) -> float:
        """Area of this rectangle."""
        return self.width * self.height

    def contains(self, other: 'Rectangle') -> bool:
        """Check if this rectangle entirely encompasses the other one."""
        _check_same_kind(self, other)
        return (
            _axis_within(self.x, self.width, other.x, other.width) and
            _axis_within(self.y, self.height, other.y, other.height)
        )

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if this rectangle overlaps the other one with non-zero area."""
        _check_same_kind(self, other)
        return (
            _axis_overlap(self.x, self.width, other.x, other.width) > 0 and
            _axis_overlap(self.y, self.height, other.y, other.height) > 0
        )

    def overlap(self, other: 'Rectangle') -> float:
        """Calculate the intersection area with another rectangle."""
        if not self.intersects(other):
            return 0.0
        return (
            _axis_overlap(self.x, self.width, other.x, other.width) *
            _axis_overlap(self.y, self.height, other.y, other.height)
        )

    def translated(self, dx: float, dy: float) -> 'Rectangle':
        return Rectangle(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class Box:
    """Axis-aligned box with a 3D position (min corner) and extent."""
    x: float
    y: float
    z: float
    width: float
    height: float
    depth: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0 or self.depth < 0:
            raise InvalidArgument(
                f"Box extents must be non-negative, got "
                f"({self.width}, {self.height}, {self.depth})"
            )

    @property
    def dimensions(self) -> int:
        return 3

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def extent(self) -> Tuple[float, float, float]:
        return (self.width, self.height, self.depth)

    @property
    def size(self) -> float:
        """Volume of this box."""
        return self.width * self.height * self.depth

    def contains(self, other: 'Box') -> bool:
        """Check if this box entirely encompasses the other one."""
        _check_same_kind(self, other)
        return (
            _axis_within(self.x, self.width, other.x, other.width) and
            _axis_within(self.y, self.height, other.y, other.height) and
            _axis_within(self.z, self.depth, other.z, other.depth)
        )

    def intersects(self, other: 'Box') -> bool:
        """Check if this box overlaps the other one with non-zero volume."""
        _check_same_kind(self, other)
        return (
            _axis_overlap(self.x, self.width, other.x, other.width) > 0 and
            _axis_overlap(self.y, self.height, other.y, other.height) > 0 and
            _axis_overlap(self.z, self.depth, other.z, other.depth) > 0
        )

    def overlap(self, other: 'Box') -> float:
        """Calculate the intersection volume with another box."""
        if not self.intersects(other):
            return 0.0
        return (
            _axis_overlap(self.x, self.width, other.x, other.width) *
            _axis_overlap(self.y, self.height, other.y, other.height) *
            _axis_overlap(self.z, self.depth, other.z, other.depth)
        )

    def translated(self, dx: float, dy: float, dz: float) -> 'Box':
        return Box(self.x + dx, self.y + dy, self.z + dz, self.width, self.height, self.depth)


Shape = Union[Rectangle, Box]


def _check_same_kind(a: Shape, b: Shape) -> None:
    if type(a) is not type(b):
        raise InvalidArgument(
            f"Cannot compare {type(a).__name__} with {type(b).__name__}"
        )


def contains(a: Shape, b: Shape) -> bool:
    """True iff shape a fully encompasses shape b (inclusive boundaries)."""
    return a.contains(b)


def intersects(a: Shape, b: Shape) -> bool:
    """True iff shapes a and b overlap on every axis (exclusive boundaries)."""
    return a.intersects(b)


def make_shape(position: Sequence[float], extent: Sequence[float]) -> Shape:
    """Build a Rectangle or Box from matching position and extent sequences.

    Raises:
        InvalidArgument: If the sequences differ in length or are not 2D/3D
    """
    if len(position) != len(extent):
        raise InvalidArgument(
            f"Position has {len(position)} components but extent has {len(extent)}"
        )
    if len(position) == 2:
        return Rectangle(float(position[0]), float(position[1]),
                         float(extent[0]), float(extent[1]))
    if len(position) == 3:
        return Box(float(position[0]), float(position[1]), float(position[2]),
                   float(extent[0]), float(extent[1]), float(extent[2]))
    raise InvalidArgument(f"Only 2D and 3D shapes are supported, got {len(position)}D")


def point_shape(point: Sequence[float]) -> Shape:
    """Zero-extent shape located at a point."""
    return make_shape(point, [0.0] * len(point))


def inset(shape: Shape, margin: float = EPSILON) -> Shape:
    """Shrink a shape by a margin on every side, never below zero extent.

    Testing the inset shape lets a placement that touches its neighbour up to float
    rounding count as touching rather than overlapping.
    """
    position = []
    extent = []
    for p, e in zip(shape.position, shape.extent):
        m = min(margin, e / 2)
        position.append(p + m)
        extent.append(e - 2 * m)
    return make_shape(position, extent)
