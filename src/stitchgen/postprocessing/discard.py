"""
Discard policies: trim dangling contexts or the chunks that own them.

Both scan a fresh snapshot per pass and repeat until a pass removes nothing.
Every pass either removes something or ends the loop, and the level only
shrinks, so the loop ends after at most (initial snapshot size + 1) passes.
"""

from typing import Optional

from ..errors import InvalidArgument
from .base import PolicyResult, PostProcessingPolicy
from .predicates import DiscardPredicate, discard_all


class _DiscardPolicy(PostProcessingPolicy):

    def __init__(self, should_discard: Optional[DiscardPredicate] = None):
        if should_discard is not None and not callable(should_discard):
            raise InvalidArgument("should_discard must be callable")
        self.should_discard = should_discard or discard_all


class DiscardOpenContextsPolicy(_DiscardPolicy):
    """Removes open contexts accepted by the predicate (all of them by default)."""

    def execute(self, generator, level) -> PolicyResult:
        result = PolicyResult(self.name)
        while True:
            result.passes += 1
            removed = 0
            for context in level.find_open_contexts():
                if context not in level or not context.is_open:
                    continue
                if self.should_discard(context):
                    level.remove_context(context)
                    removed += 1
                    self._notice(generator, result, f"Removed context at {context}")
            result.removed += removed
            if not removed:
                return result


class DiscardOpenChunksPolicy(_DiscardPolicy):
    """Removes chunks with open contexts accepted by the predicate (all by default).

    Removing a chunk re-opens the contexts it was aligned to, so neighbours can
    become open chunks and be considered in the next pass.
    """

    def execute(self, generator, level) -> PolicyResult:
        result = PolicyResult(self.name)
        while True:
            result.passes += 1
            removed = 0
            for chunk in level.find_open_chunks():
                if chunk not in level:
                    continue
                if self.should_discard(chunk):
                    level.remove_chunk(chunk)
                    removed += 1
                    self._notice(generator, result, f"Removed chunk at {chunk}")
            result.removed += removed
            if not removed:
                return result
