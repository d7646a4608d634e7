"""
Pluggable generation parameters.

- SelectionMode / select_context(): which processible context to extend next
- DeadEndPolicy: what happens to a context no candidate fits
- BlockedContextPolicy: whether candidates facing into occupied space are rejected
- ChunkDistribution: effective template weights per target context
- ContextAlignmentRestriction: which context pairs may be aligned
- TerminationCondition: MaximumChunkCount, MaximumLevelSize
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, Iterable, Sequence, Tuple, Union

from ..errors import InvalidArgument
from ..layout import ChunkTemplate, Context, Level
from .random_source import RandomSource


def _parse_enum(enum_cls, value):
    """Accept an enum member, its value or its name (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if text.lower() in (member.value, member.name.lower()):
            return member
    raise InvalidArgument(
        f"Unknown {enum_cls.__name__}: {value!r} "
        f"(expected one of {', '.join(m.value for m in enum_cls)})"
    )


# =============================================================================
# STRATEGY ENUMS
# =============================================================================

class SelectionMode(Enum):
    """Order in which open contexts are extended."""
    OLDEST_FIRST = "oldest_first"
    NEWEST_FIRST = "newest_first"
    RANDOM = "random"

    @classmethod
    def parse(cls, value) -> 'SelectionMode':
        return _parse_enum(cls, value)


class DeadEndPolicy(Enum):
    """Reaction to a context that no candidate can be attached to."""
    BLOCK = "block"          # Leave it open, never try it again
    BACKTRACK = "backtrack"  # Remove the owning leaf chunk and retry its parent context

    @classmethod
    def parse(cls, value) -> 'DeadEndPolicy':
        return _parse_enum(cls, value)


class BlockedContextPolicy(Enum):
    """Treatment of candidates whose other contexts face into occupied space."""
    IGNORE = "ignore"
    REJECT_IF_ALL_BLOCKED = "reject_if_all_blocked"
    REJECT_IF_ANY_BLOCKED = "reject_if_any_blocked"

    @classmethod
    def parse(cls, value) -> 'BlockedContextPolicy':
        return _parse_enum(cls, value)


ContextSelector = Callable[[Sequence[Context], RandomSource], Context]


def select_context(mode: Union[SelectionMode, ContextSelector],
                   contexts: Sequence[Context],
                   random: RandomSource) -> Context:
    """Pick the next context to extend from a non-empty snapshot."""
    if not contexts:
        raise InvalidArgument("No contexts to select from")
    if callable(mode) and not isinstance(mode, SelectionMode):
        return mode(contexts, random)
    if mode == SelectionMode.OLDEST_FIRST:
        return contexts[0]
    if mode == SelectionMode.NEWEST_FIRST:
        return contexts[-1]
    return random.choice(contexts)


# =============================================================================
# DISTRIBUTION AND RESTRICTIONS
# =============================================================================

class ChunkDistribution:
    """Effective weight of a template when extending a given context.

    The default uses the template's own weight. Override effective_weight() to
    make weights depend on the target context or on how many chunks of the
    template are already placed; returning 0 excludes the template.
    """

    def effective_weight(self, target: Context, template: ChunkTemplate, occurrences: int) -> float:
        return template.weight


class LimitedChunkDistribution(ChunkDistribution):
    """Caps how many chunks of each template index may be placed."""

    def __init__(self, limits: Dict[int, int]):
        for index, limit in limits.items():
            if limit < 0:
                raise InvalidArgument(f"Limit for template {index} must not be negative")
        self.limits = dict(limits)

    def effective_weight(self, target: Context, template: ChunkTemplate, occurrences: int) -> float:
        limit = self.limits.get(template.index)
        if limit is not None and occurrences >= limit:
            return 0
        return template.weight


class ContextAlignmentRestriction:
    """Decides whether two contexts may be aligned. The default allows any pair."""

    def can_be_aligned(self, first, second) -> bool:
        return True


class TagAlignmentRestriction(ContextAlignmentRestriction):
    """Only allows aligning contexts whose tags form one of the given pairs.

    Pairs are unordered; ("door", "door") allows door-to-door connections.
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]]):
        self.pairs = {frozenset(pair) for pair in pairs}
        if not self.pairs:
            raise InvalidArgument("At least one tag pair is required")

    def can_be_aligned(self, first, second) -> bool:
        return frozenset((first.tag, second.tag)) in self.pairs


# =============================================================================
# TERMINATION CONDITIONS
# =============================================================================

class TerminationCondition(ABC):
    """Stops generation once met."""

    @abstractmethod
    def is_met(self, level: Level) -> bool:
        ...

    def progress(self, level: Level) -> float:
        """Fraction in [0, 1] of the way towards this condition."""
        return 1.0 if self.is_met(level) else 0.0


class MaximumChunkCount(TerminationCondition):
    def __init__(self, max_chunks: int):
        if max_chunks is None or max_chunks < 1:
            raise InvalidArgument(f"max_chunks must be at least 1, got {max_chunks}")
        self.max_chunks = max_chunks

    def is_met(self, level: Level) -> bool:
        return len(level) >= self.max_chunks

    def progress(self, level: Level) -> float:
        return min(1.0, len(level) / self.max_chunks)

    def __repr__(self) -> str:
        return f"MaximumChunkCount({self.max_chunks})"


class MaximumLevelSize(TerminationCondition):
    """Met once the summed chunk area (2D) or volume (3D) reaches max_size."""

    def __init__(self, max_size: float):
        if max_size is None or max_size <= 0:
            raise InvalidArgument(f"max_size must be positive, got {max_size}")
        self.max_size = max_size

    def is_met(self, level: Level) -> bool:
        return level.size >= self.max_size

    def progress(self, level: Level) -> float:
        return min(1.0, level.size / self.max_size)

    def __repr__(self) -> str:
        return f"MaximumLevelSize({self.max_size})"
