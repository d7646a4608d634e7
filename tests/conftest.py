"""
Shared fixtures for stitchgen tests.
"""

import pytest

from stitchgen import (
    ChunkCatalog,
    ChunkTemplate,
    ContextDefinition,
    Direction,
    GeneratorSettings,
    LevelGenerator,
)


def make_cross_template(**kwargs) -> ChunkTemplate:
    """10x10 square with one context in the middle of every side."""
    return ChunkTemplate(
        (10, 10),
        contexts=[
            ContextDefinition((5, 0), Direction.SOUTH),
            ContextDefinition((10, 5), Direction.EAST),
            ContextDefinition((5, 10), Direction.NORTH),
            ContextDefinition((0, 5), Direction.WEST),
        ],
        **kwargs,
    )


def make_corridor_template(**kwargs) -> ChunkTemplate:
    """10x10 square connecting west to east."""
    return ChunkTemplate(
        (10, 10),
        contexts=[
            ContextDefinition((0, 5), Direction.WEST),
            ContextDefinition((10, 5), Direction.EAST),
        ],
        **kwargs,
    )


@pytest.fixture
def cross_template():
    return make_cross_template(tag="room")


@pytest.fixture
def corridor_template():
    return make_corridor_template(tag="corridor")


@pytest.fixture
def cross_catalog(cross_template):
    return ChunkCatalog([cross_template])


@pytest.fixture
def corridor_catalog(corridor_template):
    return ChunkCatalog([corridor_template])


@pytest.fixture
def generator(cross_catalog):
    return LevelGenerator(cross_catalog, GeneratorSettings(max_chunks=5, seed=42))
