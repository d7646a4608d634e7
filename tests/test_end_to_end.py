"""
End-to-end generation scenarios.
"""

from itertools import combinations

from stitchgen import (
    ChunkCatalog,
    ChunkTemplate,
    ContextDefinition,
    DeadEndPolicy,
    Direction,
    DiscardOpenContextsPolicy,
    GeneratorSettings,
    LevelGenerator,
    TerminationReason,
    validate_level,
)

from conftest import make_cross_template


def test_five_chunk_cross_level():
    """One symmetric square template, five chunks, then discard open contexts"""
    catalog = ChunkCatalog([make_cross_template()])
    generator = LevelGenerator(catalog, GeneratorSettings(max_chunks=5, seed=2024))
    result = generator.generate()
    level = result.level

    assert result.termination == TerminationReason.TARGET_REACHED
    assert len(level) == 5
    for a, b in combinations(level.chunks, 2):
        assert not a.bounds.intersects(b.bounds)

    pairs = level.aligned_pairs()
    assert len(pairs) == 4
    assert all(first.chunk is level.root for first, _ in pairs)
    for first, second in pairs:
        assert not first.is_open and not second.is_open
        assert first.position == second.position

    open_contexts = level.find_open_contexts()
    assert len(open_contexts) == 12

    policy_result = DiscardOpenContextsPolicy().process(generator, level)
    assert policy_result.removed == 12
    assert level.find_open_contexts() == []
    assert len(level) == 5
    assert validate_level(level).issues == []


def test_3d_tower():
    """Boxes stack vertically through UP/DOWN contexts"""
    floor = ChunkTemplate(
        (10, 10, 4),
        contexts=[
            ContextDefinition((5, 5, 0), Direction.DOWN),
            ContextDefinition((5, 5, 4), Direction.UP),
        ],
        allow_rotation=True,
        tag="floor",
    )
    settings = GeneratorSettings(dimensions=3, level_bounds=(10, 10, 20), start_position=(0, 0, 0), seed=5)
    result = LevelGenerator(ChunkCatalog([floor]), settings).generate()
    level = result.level

    assert len(level) == 5
    assert sorted(chunk.position[2] for chunk in level) == [0, 4, 8, 12, 16]
    assert result.termination == TerminationReason.NO_OPEN_CONTEXTS
    assert validate_level(level).passed


def test_backtracking_level_is_consistent():
    """Backtracking never leaves dangling alignments behind"""
    catalog = ChunkCatalog([
        make_cross_template(allow_rotation=True),
        ChunkTemplate(
            (10, 30),
            contexts=[ContextDefinition((5, 0), Direction.SOUTH), ContextDefinition((5, 30), Direction.NORTH)],
            allow_rotation=True,
        ),
    ])
    settings = GeneratorSettings(
        seed=77,
        level_bounds=(80, 80),
        dead_end_policy=DeadEndPolicy.BACKTRACK,
        max_backtracks=10,
        max_iterations=400,
    )
    result = LevelGenerator(catalog, settings).generate()
    validation = validate_level(result.level)
    assert validation.passed
    assert "LEVEL-003" not in validation.codes()
    assert "LEVEL-004" not in validation.codes()
    assert result.stats.backtracks <= 10
