"""
Tests for axis-aligned shapes and their containment / intersection predicates.
"""

import pytest

from stitchgen.errors import InvalidArgument
from stitchgen.geometry import EPSILON, Box, Rectangle, contains, inset, intersects, make_shape, point_shape


def test_contains_inclusive_boundaries():
    """A shape touching the boundary from inside is contained"""
    outer = Rectangle(0, 0, 10, 10)
    assert outer.contains(Rectangle(0, 0, 5, 5))
    assert outer.contains(Rectangle(5, 5, 5, 5))
    assert outer.contains(outer)
    assert not outer.contains(Rectangle(6, 6, 5, 5))
    assert not Rectangle(0, 0, 5, 5).contains(outer)


def test_intersects_exclusive_boundaries():
    """Touching edges do not intersect, real overlap does"""
    a = Rectangle(0, 0, 10, 10)
    assert not a.intersects(Rectangle(10, 0, 5, 5))
    assert not a.intersects(Rectangle(0, 10, 5, 5))
    assert not a.intersects(Rectangle(10, 10, 5, 5))
    assert a.intersects(Rectangle(9, 9, 5, 5))
    assert a.intersects(Rectangle(2, 2, 1, 1))


def test_intersects_is_symmetric():
    """intersects(a, b) == intersects(b, a) for a spread of cases"""
    shapes = [
        Rectangle(0, 0, 10, 10),
        Rectangle(10, 0, 5, 5),
        Rectangle(9, 9, 5, 5),
        Rectangle(-3, -3, 4, 4),
        Rectangle(2, 2, 0, 0),
    ]
    for a in shapes:
        for b in shapes:
            assert intersects(a, b) == intersects(b, a)


def test_contains_implies_not_disjoint():
    """A contained shape with positive extent always intersects its container"""
    outer = Rectangle(0, 0, 10, 10)
    inner = Rectangle(1, 1, 2, 2)
    assert contains(outer, inner)
    assert intersects(outer, inner)


def test_zero_extent_shape():
    """A zero-extent shape can be contained but never intersects anything"""
    point = point_shape((5, 5))
    assert Rectangle(0, 0, 10, 10).contains(point)
    assert Rectangle(5, 5, 1, 1).contains(point)
    assert not Rectangle(0, 0, 10, 10).intersects(point)
    assert not point.intersects(point)


def test_box_predicates():
    """Boxes follow the same rules on all three axes"""
    box = Box(0, 0, 0, 10, 10, 10)
    assert box.contains(Box(0, 0, 0, 10, 10, 5))
    assert not box.intersects(Box(0, 0, 10, 10, 10, 10))
    assert box.intersects(Box(5, 5, 5, 10, 10, 10))
    assert box.overlap(Box(5, 5, 5, 10, 10, 10)) == 125


def test_overlap_area():
    """Overlap is the intersection area, zero when only touching"""
    a = Rectangle(0, 0, 10, 10)
    assert a.overlap(Rectangle(9, 9, 5, 5)) == 1
    assert a.overlap(Rectangle(10, 0, 5, 5)) == 0


def test_negative_extent_rejected():
    """Negative extents are invalid"""
    with pytest.raises(InvalidArgument):
        Rectangle(0, 0, -1, 5)
    with pytest.raises(InvalidArgument):
        Box(0, 0, 0, 1, 1, -1)


def test_mixing_dimensions_rejected():
    """Rectangles and boxes cannot be compared"""
    with pytest.raises(InvalidArgument):
        Rectangle(0, 0, 1, 1).intersects(Box(0, 0, 0, 1, 1, 1))


def test_make_shape():
    """make_shape picks the shape type from the number of components"""
    assert make_shape((1, 2), (3, 4)) == Rectangle(1, 2, 3, 4)
    assert make_shape((1, 2, 3), (4, 5, 6)) == Box(1, 2, 3, 4, 5, 6)
    assert make_shape((1, 2), (3, 4)).size == 12
    with pytest.raises(InvalidArgument):
        make_shape((1, 2), (3, 4, 5))
    with pytest.raises(InvalidArgument):
        make_shape((1,), (3,))


def test_translated():
    """Translation moves the position and keeps the extent"""
    assert Rectangle(0, 0, 2, 3).translated(1, 1) == Rectangle(1, 1, 2, 3)
    assert Box(0, 0, 0, 1, 1, 1).translated(1, 2, 3).position == (1, 2, 3)


def test_inset_shrinks_every_side():
    """Insetting moves the min corner in and shrinks the extent twice as much"""
    assert inset(Rectangle(0, 0, 10, 10), 1) == Rectangle(1, 1, 8, 8)
    assert inset(Box(0, 0, 0, 4, 4, 4), 1).extent == (2, 2, 2)
    flat = inset(Rectangle(0, 0, 1, 0))
    assert flat.y == 0 and flat.height == 0
    assert flat.width == pytest.approx(1 - 2 * EPSILON)


def test_inset_absorbs_rounding_between_neighbours():
    """A neighbour placed by subtracting its extent touches rather than overlaps"""
    upper = Rectangle(0.3, 0.3, 10, 10)
    lower = make_shape((0.3, 0.3 - 10), (10, 10))
    assert not upper.intersects(inset(lower))
    assert upper.intersects(inset(make_shape((0.3, 0.3 - 9), (10, 10))))
