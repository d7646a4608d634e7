"""
Level layout: templates, placed chunks and contexts, the catalog and the level container.
"""

from .data_model import (
    Anchor,
    AnchorDefinition,
    Chunk,
    ChunkTemplate,
    Context,
    ContextDefinition,
)
from .catalog import ChunkCatalog
from .level import Level

__all__ = [
    'Anchor',
    'AnchorDefinition',
    'Chunk',
    'ChunkCatalog',
    'ChunkTemplate',
    'Context',
    'ContextDefinition',
    'Level',
]
