"""
Discard predicates for the discard policies.

A predicate receives a context or a chunk and returns True if it should be
discarded. Both carry a tag, so the tag helpers work for either.
"""

from typing import Callable

DiscardPredicate = Callable[[object], bool]


def discard_all(item) -> bool:
    return True


def discard_none(item) -> bool:
    return False


def discard_tagged(*tags: str) -> DiscardPredicate:
    """Discard items whose tag is one of the given tags."""
    wanted = frozenset(tags)

    def predicate(item) -> bool:
        return item.tag in wanted
    return predicate


def keep_tagged(*tags: str) -> DiscardPredicate:
    """Discard everything except items whose tag is one of the given tags."""
    kept = frozenset(tags)

    def predicate(item) -> bool:
        return item.tag not in kept
    return predicate
