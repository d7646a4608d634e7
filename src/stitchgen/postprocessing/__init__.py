"""
Post-processing policies run over a finished level.
"""

from .base import PolicyResult, PostProcessingPolicy
from .predicates import discard_all, discard_none, discard_tagged, keep_tagged
from .discard import DiscardOpenChunksPolicy, DiscardOpenContextsPolicy
from .alignment import AlignAdjacentContextsPolicy

__all__ = [
    'AlignAdjacentContextsPolicy',
    'DiscardOpenChunksPolicy',
    'DiscardOpenContextsPolicy',
    'PolicyResult',
    'PostProcessingPolicy',
    'discard_all',
    'discard_none',
    'discard_tagged',
    'keep_tagged',
]
