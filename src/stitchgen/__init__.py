"""
stitchgen - procedural level generation by stitching chunk templates together.

Usage:
    from stitchgen import (
        ChunkCatalog, ChunkTemplate, ContextDefinition, Direction,
        GeneratorSettings, LevelGenerator, DiscardOpenContextsPolicy,
    )

    catalog = ChunkCatalog([
        ChunkTemplate((10, 10), contexts=[
            ContextDefinition((5, 10), Direction.NORTH),
            ContextDefinition((10, 5), Direction.EAST),
        ]),
    ])
    generator = LevelGenerator(
        catalog,
        GeneratorSettings(max_chunks=20, seed=42),
        post_processing=[DiscardOpenContextsPolicy()],
    )
    result = generator.generate()
"""

from .errors import (
    GenerationExhausted,
    InvalidArgument,
    InvalidOperation,
    NotFoundError,
    StitchGenError,
    ValidationError,
)
from .geometry import Box, Direction, Rectangle, contains, intersects
from .layout import (
    Anchor,
    AnchorDefinition,
    Chunk,
    ChunkCatalog,
    ChunkTemplate,
    Context,
    ContextDefinition,
    Level,
)
from .generation import (
    BlockedContextPolicy,
    ChunkDistribution,
    ContextAlignmentRestriction,
    DeadEndPolicy,
    GenerationResult,
    GeneratorSettings,
    LevelGenerator,
    MaximumChunkCount,
    MaximumLevelSize,
    RandomSource,
    SelectionMode,
    TagAlignmentRestriction,
    TerminationReason,
)
from .postprocessing import (
    AlignAdjacentContextsPolicy,
    DiscardOpenChunksPolicy,
    DiscardOpenContextsPolicy,
    PostProcessingPolicy,
)
from .validation import validate_level

__version__ = "0.1.0"

__all__ = [
    'AlignAdjacentContextsPolicy',
    'Anchor',
    'AnchorDefinition',
    'BlockedContextPolicy',
    'Box',
    'Chunk',
    'ChunkCatalog',
    'ChunkDistribution',
    'ChunkTemplate',
    'Context',
    'ContextAlignmentRestriction',
    'ContextDefinition',
    'DeadEndPolicy',
    'Direction',
    'DiscardOpenChunksPolicy',
    'DiscardOpenContextsPolicy',
    'GenerationExhausted',
    'GenerationResult',
    'GeneratorSettings',
    'InvalidArgument',
    'InvalidOperation',
    'Level',
    'LevelGenerator',
    'MaximumChunkCount',
    'MaximumLevelSize',
    'NotFoundError',
    'PostProcessingPolicy',
    'RandomSource',
    'Rectangle',
    'SelectionMode',
    'StitchGenError',
    'TagAlignmentRestriction',
    'TerminationReason',
    'ValidationError',
    'contains',
    'intersects',
    'validate_level',
]
