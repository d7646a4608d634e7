"""
Tests for the level container and its open-context / open-chunk indices.
"""

import pytest

from stitchgen.errors import InvalidArgument, InvalidOperation, NotFoundError
from stitchgen.geometry import Rectangle
from stitchgen.layout import Chunk, Level

from conftest import make_cross_template


@pytest.fixture
def pair():
    """Two cross chunks side by side, aligned east to west."""
    template = make_cross_template()
    level = Level()
    left = Chunk(template, (0, 0))
    right = Chunk(template, (10, 0))
    level.add_chunk(left)
    level.add_chunk(right)
    level.align(left.get_context(1), right.get_context(3))
    return level, left, right


def test_add_and_iterate(pair):
    """Chunks keep insertion order"""
    level, left, right = pair
    assert len(level) == 2
    assert list(level) == [left, right]
    assert level.root is left
    assert left in level
    assert level.get_chunk(right.id) is right
    assert level.size == 200


def test_open_context_order(pair):
    """Open contexts come in chunk insertion order, then context order"""
    level, left, right = pair
    open_contexts = level.find_open_contexts()
    assert [(c.chunk, c.index) for c in open_contexts] == [
        (left, 0), (left, 2), (left, 3),
        (right, 0), (right, 1), (right, 2),
    ]
    assert all(c.is_open for c in open_contexts)


def test_snapshot_independence(pair):
    """A returned snapshot does not change when the level changes"""
    level, left, right = pair
    contexts = level.find_open_contexts()
    chunks = level.find_open_chunks()
    level.remove_chunk(right)
    assert len(contexts) == 6
    assert len(chunks) == 2
    assert len(level.find_open_contexts()) == 4


def test_remove_chunk_reopens_partner(pair):
    """Removing a chunk re-opens the context it was aligned to"""
    level, left, right = pair
    level.remove_chunk(right)
    assert right not in level
    assert left.get_context(1).is_open
    assert all(c.chunk is left for c in level.find_open_contexts())
    assert len(level.find_open_contexts()) == 4


def test_remove_chunk_not_found(pair):
    """Removing a chunk twice fails"""
    level, left, right = pair
    level.remove_chunk(right)
    with pytest.raises(NotFoundError):
        level.remove_chunk(right)


def test_remove_context(pair):
    """Removing a context drops it from the chunk and the index"""
    level, left, right = pair
    context = left.get_context(0)
    level.remove_context(context)
    assert context not in level
    assert context not in level.find_open_contexts()
    assert len(left.contexts) == 3
    with pytest.raises(NotFoundError):
        level.remove_context(context)


def test_remove_aligned_context_reopens_partner(pair):
    """Removing one side of an aligned pair re-opens the other side"""
    level, left, right = pair
    level.remove_context(left.get_context(1))
    assert right.get_context(3).is_open


def test_open_chunks(pair):
    """Chunks with no open context are not open chunks"""
    level, left, right = pair
    for context in list(left.open_contexts()):
        level.remove_context(context)
    assert level.find_open_chunks() == [right]


def test_align_rejects_invalid_pairs(pair):
    """Already aligned contexts and same-chunk pairs cannot be aligned"""
    level, left, right = pair
    with pytest.raises(InvalidOperation):
        level.align(left.get_context(1), right.get_context(0))
    with pytest.raises(InvalidOperation):
        level.align(left.get_context(0), left.get_context(2))
    outsider = Chunk(make_cross_template(), (50, 50))
    with pytest.raises(NotFoundError):
        level.align(left.get_context(0), outsider.get_context(0))


def test_block_context(pair):
    """Blocked contexts stay open but are not processible"""
    level, left, right = pair
    context = left.get_context(0)
    level.block_context(context)
    assert context.is_open
    assert context in level.find_open_contexts()
    assert context not in level.find_processible_contexts()


def test_aligned_pairs(pair):
    """Each aligned pair is listed once"""
    level, left, right = pair
    assert level.aligned_pairs() == [(left.get_context(1), right.get_context(3))]


def test_level_bounds():
    """Bounds are a shape anchored at the origin"""
    level = Level(2, bounds=(100, 50))
    assert level.bounds == Rectangle(0, 0, 100, 50)
    with pytest.raises(InvalidArgument):
        Level(2, bounds=(100, 50, 10))
    with pytest.raises(InvalidArgument):
        Level(4)


def test_add_chunk_rejects_wrong_dimensions():
    """A 2D chunk cannot join a 3D level, nor can a chunk be added twice"""
    chunk = Chunk(make_cross_template(), (0, 0))
    with pytest.raises(InvalidArgument):
        Level(3).add_chunk(chunk)
    level = Level()
    level.add_chunk(chunk)
    with pytest.raises(InvalidArgument):
        level.add_chunk(chunk)
