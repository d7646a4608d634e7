"""
Level generation: settings, pluggable parameters and the placement loop.
"""

from .random_source import RandomSource
from .parameters import (
    BlockedContextPolicy,
    ChunkDistribution,
    ContextAlignmentRestriction,
    DeadEndPolicy,
    LimitedChunkDistribution,
    MaximumChunkCount,
    MaximumLevelSize,
    SelectionMode,
    TagAlignmentRestriction,
    TerminationCondition,
    select_context,
)
from .settings import GeneratorSettings
from .level_generator import (
    GenerationProgress,
    GenerationResult,
    GenerationStats,
    LevelGenerator,
    Placement,
    TerminationReason,
)

__all__ = [
    'BlockedContextPolicy',
    'ChunkDistribution',
    'ContextAlignmentRestriction',
    'DeadEndPolicy',
    'GenerationProgress',
    'GenerationResult',
    'GenerationStats',
    'GeneratorSettings',
    'LevelGenerator',
    'LimitedChunkDistribution',
    'MaximumChunkCount',
    'MaximumLevelSize',
    'Placement',
    'RandomSource',
    'SelectionMode',
    'TagAlignmentRestriction',
    'TerminationCondition',
    'TerminationReason',
    'select_context',
]
