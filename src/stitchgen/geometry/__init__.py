"""
Geometry primitives: axis-aligned shapes and quarter-turn orientation helpers.
"""

from .shapes import (
    Rectangle,
    Box,
    Shape,
    contains,
    intersects,
    EPSILON,
    inset,
    make_shape,
    point_shape,
)
from .orientation import (
    Direction,
    QUARTER_TURNS,
    rotate_direction,
    rotate_extent,
    rotate_offset,
    rotation_matrix,
)

__all__ = [
    'Rectangle',
    'Box',
    'Shape',
    'contains',
    'intersects',
    'EPSILON',
    'inset',
    'make_shape',
    'point_shape',
    'Direction',
    'QUARTER_TURNS',
    'rotate_direction',
    'rotate_extent',
    'rotate_offset',
    'rotation_matrix',
]
