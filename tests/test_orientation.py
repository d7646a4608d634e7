"""
Tests for directions and quarter-turn transforms.
"""

import pytest

from stitchgen.errors import InvalidArgument
from stitchgen.geometry import (
    Direction,
    rotate_direction,
    rotate_extent,
    rotate_offset,
    rotation_matrix,
)


def test_opposites():
    """Every direction's opposite points the other way"""
    assert Direction.NORTH.opposite() == Direction.SOUTH
    assert Direction.EAST.opposite() == Direction.WEST
    assert Direction.UP.opposite() == Direction.DOWN
    for direction in Direction:
        assert direction.opposite().opposite() == direction


def test_vectors():
    """Unit vectors match the axis conventions"""
    assert Direction.NORTH.vector(2) == (0, 1)
    assert Direction.WEST.vector(2) == (-1, 0)
    assert Direction.DOWN.vector(3) == (0, 0, -1)
    with pytest.raises(InvalidArgument):
        Direction.UP.vector(2)
    assert Direction.from_vector((1, 0)) == Direction.EAST
    assert Direction.from_vector((0, 0, 1)) == Direction.UP


def test_parse():
    """Directions parse from names and values"""
    assert Direction.parse("north") == Direction.NORTH
    assert Direction.parse("WEST") == Direction.WEST
    assert Direction.parse(Direction.UP) == Direction.UP
    with pytest.raises(InvalidArgument):
        Direction.parse("sideways")


def test_rotate_direction_clockwise():
    """One quarter turn moves NORTH -> EAST -> SOUTH -> WEST"""
    assert rotate_direction(Direction.NORTH, 1) == Direction.EAST
    assert rotate_direction(Direction.EAST, 1) == Direction.SOUTH
    assert rotate_direction(Direction.SOUTH, 1) == Direction.WEST
    assert rotate_direction(Direction.WEST, 1) == Direction.NORTH
    assert rotate_direction(Direction.NORTH, 2) == Direction.SOUTH
    assert rotate_direction(Direction.NORTH, 4) == Direction.NORTH
    assert rotate_direction(Direction.UP, 1) == Direction.UP


def test_rotation_matrix_full_turn_is_identity():
    """Four quarter turns bring every vector back"""
    assert (rotation_matrix(4, 2) == rotation_matrix(0, 2)).all()
    assert (rotation_matrix(1, 3) @ rotation_matrix(3, 3) == rotation_matrix(0, 3)).all()


def test_rotate_extent():
    """Odd turns swap width and height"""
    assert rotate_extent((10, 20), 1) == (20, 10)
    assert rotate_extent((10, 20), 2) == (10, 20)
    assert rotate_extent((10, 20, 30), 3) == (20, 10, 30)


def test_rotate_offset_stays_inside_rotated_box():
    """A north-edge point of a 10x20 box ends on the east edge after one turn"""
    assert rotate_offset((5, 20), (10, 20), 1) == (20, 5)
    assert rotate_offset((5, 0), (10, 20), 2) == (5, 20)
    assert rotate_offset((0, 0), (10, 20), 3) == (20, 0)
    assert rotate_offset((5, 20, 7), (10, 20, 30), 1) == (20, 5, 7)


def test_rotate_offset_no_negative_zero():
    """Rotated offsets never contain -0.0"""
    offset = rotate_offset((0, 0), (10, 10), 2)
    assert offset == (10, 10)
    assert all(str(v) != "-0.0" for v in rotate_offset((10, 0), (10, 10), 1))


def test_rotate_offset_dimension_mismatch():
    """Offset and extent must agree on dimensionality"""
    with pytest.raises(InvalidArgument):
        rotate_offset((1, 2), (1, 2, 3), 1)
