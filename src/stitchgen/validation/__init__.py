"""
Level validation: rule definitions, issue collection and invariant checks.

Usage:
    from stitchgen.validation import validate_level

    result = validate_level(level)
    if result.failed:
        print(result.report())
"""

from ..errors import ValidationError
from .core import Severity, ValidationIssue, ValidationResult
from .rules import ALL_RULES, ValidationRule
from .level_checks import (
    check_alignments,
    check_bounds,
    check_open_contexts,
    check_overlaps,
    validate_level,
)

__all__ = [
    'ALL_RULES',
    'Severity',
    'ValidationError',
    'ValidationIssue',
    'ValidationResult',
    'ValidationRule',
    'check_alignments',
    'check_bounds',
    'check_open_contexts',
    'check_overlaps',
    'validate_level',
]
