"""
Invariant checks for a generated level.

Validates:
- LEVEL-001: Pairwise chunk overlap
- LEVEL-002: Chunks outside the level bounds
- LEVEL-003: Aligned contexts whose partner left the level
- LEVEL-004: Asymmetric alignment
- LEVEL-005: Aligned contexts that are apart or not facing each other
- LEVEL-006: Remaining open contexts
"""

import math
from itertools import combinations
from typing import List

from ..geometry import inset
from .core import ValidationIssue, ValidationResult
from .rules import LEVEL_001, LEVEL_002, LEVEL_003, LEVEL_004, LEVEL_005, LEVEL_006

# Distance below which two aligned contexts count as coincident
ALIGNMENT_TOLERANCE = 1e-6


def check_overlaps(level) -> List[ValidationIssue]:
    issues = []
    for first, second in combinations(level.chunks, 2):
        if first.bounds.intersects(inset(second.bounds)):
            issues.append(LEVEL_001.issue(
                location=str(first),
                first=first,
                second=second,
                overlap=first.bounds.overlap(second.bounds),
            ))
    return issues


def check_bounds(level) -> List[ValidationIssue]:
    if level.bounds is None:
        return []
    return [
        LEVEL_002.issue(location=str(chunk), chunk=chunk, bounds=level.bounds.extent)
        for chunk in level.chunks
        if not level.bounds.contains(inset(chunk.bounds))
    ]


def check_alignments(level) -> List[ValidationIssue]:
    """LEVEL-003, LEVEL-004 and LEVEL-005 for every aligned context."""
    issues = []
    for chunk in level.chunks:
        for context in chunk.contexts:
            target = context.target
            if target is None:
                continue
            if target not in level:
                issues.append(LEVEL_003.issue(location=str(chunk), context=context))
                continue
            if target.target is not context:
                issues.append(LEVEL_004.issue(location=str(chunk), context=context, target=target))
                continue
            distance = math.dist(context.position, target.position)
            if distance > ALIGNMENT_TOLERANCE or target.direction != context.direction.opposite():
                # Each pair is reported once, from the chunk inserted first
                if _reported_first(level, context, target):
                    issues.append(LEVEL_005.issue(
                        location=str(chunk), context=context, target=target, distance=distance,
                    ))
    return issues


def _reported_first(level, context, target) -> bool:
    for chunk in level.chunks:
        if chunk is context.chunk:
            return True
        if chunk is target.chunk:
            return False
    return True


def check_open_contexts(level) -> List[ValidationIssue]:
    count = len(level.find_open_contexts())
    if not count:
        return []
    return [LEVEL_006.issue(count=count)]


def validate_level(level) -> ValidationResult:
    """Run all level checks and collect their issues."""
    result = ValidationResult()
    for check in (check_overlaps, check_bounds, check_alignments, check_open_contexts):
        for issue in check(level):
            result.add_issue(issue)
    return result
