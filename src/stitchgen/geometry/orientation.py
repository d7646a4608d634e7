"""
Directions and quarter-turn rigid transforms for chunk placement.

Rotation System:
- Chunks support 0, 1, 2 or 3 quarter turns, clockwise seen from above (+Z)
- NORTH -> EAST -> SOUTH -> WEST for each quarter turn
- UP and DOWN are invariant (3D chunks only rotate about the vertical axis)
- rotate_offset() keeps a rotated offset inside the rotated bounding box, which
  stays anchored at the chunk origin (its min corner)

All rotations use integer matrices so that transformed positions are exact for
the coordinates templates are authored in.
"""

from __future__ import annotations

import itertools
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

from ..errors import InvalidArgument


QUARTER_TURNS = (0, 1, 2, 3)

# Clockwise quarter turn about +Z: (x, y) -> (y, -x)
_QUARTER_TURN_2D = np.array([[0, 1], [-1, 0]], dtype=np.int64)
_QUARTER_TURN_3D = np.array([[0, 1, 0], [-1, 0, 0], [0, 0, 1]], dtype=np.int64)


class Direction(Enum):
    """Outward facing direction of a context."""
    NORTH = "north"  # +Y direction
    EAST = "east"    # +X direction
    SOUTH = "south"  # -Y direction
    WEST = "west"    # -X direction
    UP = "up"        # +Z direction
    DOWN = "down"    # -Z direction

    def opposite(self) -> 'Direction':
        """Return the opposite direction."""
        return _OPPOSITES[self]

    @property
    def is_planar(self) -> bool:
        """True for directions that exist in 2D levels."""
        return self not in (Direction.UP, Direction.DOWN)

    def vector(self, dimensions: int = 3) -> Tuple[int, ...]:
        """Unit vector of this direction with the given number of components."""
        if dimensions not in (2, 3):
            raise InvalidArgument(f"Only 2D and 3D directions exist, got {dimensions}D")
        vec = _VECTORS[self]
        if dimensions == 2:
            if not self.is_planar:
                raise InvalidArgument(f"{self.name} has no 2D vector")
            return vec[:2]
        return vec

    @staticmethod
    def from_vector(vector: Sequence[float]) -> 'Direction':
        """Look up the direction for an axis-aligned unit vector."""
        key = tuple(int(round(v)) for v in vector)
        if len(key) == 2:
            key = key + (0,)
        for direction, vec in _VECTORS.items():
            if vec == key:
                return direction
        raise InvalidArgument(f"{tuple(vector)} is not an axis-aligned unit vector")

    @staticmethod
    def parse(value) -> 'Direction':
        """Accept a Direction, its value ("north") or its name ("NORTH")."""
        if isinstance(value, Direction):
            return value
        try:
            return Direction(str(value).lower())
        except ValueError:
            raise InvalidArgument(f"Unknown direction: {value!r}") from None


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

_VECTORS = {
    Direction.NORTH: (0, 1, 0),
    Direction.EAST: (1, 0, 0),
    Direction.SOUTH: (0, -1, 0),
    Direction.WEST: (-1, 0, 0),
    Direction.UP: (0, 0, 1),
    Direction.DOWN: (0, 0, -1),
}


def rotation_matrix(turns: int, dimensions: int) -> np.ndarray:
    """Integer matrix for the given number of clockwise quarter turns."""
    if dimensions == 2:
        base = _QUARTER_TURN_2D
    elif dimensions == 3:
        base = _QUARTER_TURN_3D
    else:
        raise InvalidArgument(f"Only 2D and 3D rotations exist, got {dimensions}D")
    return np.linalg.matrix_power(base, turns % 4)


def _as_floats(values: np.ndarray) -> Tuple[float, ...]:
    # + 0.0 folds -0.0 into 0.0
    return tuple(float(v) + 0.0 for v in values)


def rotate_direction(direction: Direction, turns: int) -> Direction:
    """Get the direction after applying clockwise quarter turns."""
    if turns % 4 == 0 or not direction.is_planar:
        return direction
    rotated = rotation_matrix(turns, 3) @ np.array(direction.vector(3))
    return Direction.from_vector(rotated)


def rotate_extent(extent: Sequence[float], turns: int) -> Tuple[float, ...]:
    """Get the extent after rotation (width and height swap on odd turns)."""
    matrix = np.abs(rotation_matrix(turns, len(extent)))
    return _as_floats(matrix @ np.asarray(extent, dtype=float))


def rotate_offset(offset: Sequence[float], extent: Sequence[float], turns: int) -> Tuple[float, ...]:
    """Rotate an offset within a bounding box anchored at the origin.

    Args:
        offset: Point relative to the box's min corner
        extent: Box extent before rotation
        turns: Clockwise quarter turns

    Returns:
        The offset relative to the rotated box's min corner
    """
    if len(offset) != len(extent):
        raise InvalidArgument(
            f"Offset has {len(offset)} components but extent has {len(extent)}"
        )
    matrix = rotation_matrix(turns, len(extent))
    corners = np.array(list(itertools.product(*[(0.0, float(e)) for e in extent])))
    shift = (corners @ matrix.T).min(axis=0)
    return _as_floats(matrix @ np.asarray(offset, dtype=float) - shift)
