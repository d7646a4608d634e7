"""
Closes loops the tree-shaped generation leaves open.

Generation only ever attaches a new chunk to one existing context, so two chunks
that end up side by side keep their facing contexts open. This policy aligns such
pairs.
"""

from ..errors import InvalidArgument
from ..geometry import EPSILON
from .base import PolicyResult, PostProcessingPolicy


class AlignAdjacentContextsPolicy(PostProcessingPolicy):
    """Aligns open contexts of different chunks that face each other.

    Args:
        offset: Maximum distance between two contexts to count as adjacent, on top
            of EPSILON for float rounding
        restriction: Optional ContextAlignmentRestriction; defaults to the
            generator's own restriction
    """

    def __init__(self, offset: float = 0.0, restriction=None):
        if offset is None or offset < 0:
            raise InvalidArgument(f"Alignment offset must not be negative, got {offset}")
        self.offset = offset
        self.restriction = restriction

    def execute(self, generator, level) -> PolicyResult:
        result = PolicyResult(self.name, passes=1)
        restriction = self.restriction or generator.alignment
        contexts = level.find_open_contexts()

        for i, first in enumerate(contexts):
            if not first.is_open:
                continue
            for second in contexts[i + 1:]:
                if not second.is_open or second.chunk is first.chunk:
                    continue
                if second.direction != first.direction.opposite():
                    continue
                if not first.is_adjacent_to(second, self.offset + EPSILON):
                    continue
                if not restriction.can_be_aligned(first, second):
                    continue
                level.align(first, second)
                result.aligned += 1
                self._notice(generator, result, f"Aligned adjacent contexts at {first} and {second}")
                break
        return result

    def __repr__(self) -> str:
        return f"{self.name}(offset={self.offset})"
