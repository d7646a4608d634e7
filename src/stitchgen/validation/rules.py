"""
Validation rule definitions for generated levels.

Each rule has:
- Code: Unique identifier (e.g., "LEVEL-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "LEVEL-001")
        severity: Default severity for this rule
        message_template: Template for the issue message (use {placeholders})
        remediation_template: Template for the suggested fix
        description: Full description of the rule
    """
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, location: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Build a ValidationIssue for this rule."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            remediation=self.format_remediation(**kwargs),
            location=location,
        )


# =============================================================================
# LEVEL RULES (LEVEL)
# =============================================================================

LEVEL_001 = ValidationRule(
    code="LEVEL-001",
    severity=Severity.FAIL,
    message_template="Chunks {first} and {second} overlap by {overlap:g}",
    remediation_template="Remove one of the chunks or regenerate the level",
    description="Placed chunks must never intersect each other",
)

LEVEL_002 = ValidationRule(
    code="LEVEL-002",
    severity=Severity.FAIL,
    message_template="Chunk {chunk} lies outside the level bounds {bounds}",
    remediation_template="Remove the chunk or enlarge the level bounds",
    description="With level bounds set, every chunk must be contained by them",
)

LEVEL_003 = ValidationRule(
    code="LEVEL-003",
    severity=Severity.FAIL,
    message_template="Context {context} is aligned to a context whose chunk is not in the level",
    remediation_template="Remove chunks through Level.remove_chunk so partners are re-opened",
    description="An aligned context's partner must belong to a chunk in the level",
)

LEVEL_004 = ValidationRule(
    code="LEVEL-004",
    severity=Severity.FAIL,
    message_template="Context {context} targets {target}, which does not target it back",
    remediation_template="Align contexts through Level.align",
    description="Alignment is symmetric: a.target is b implies b.target is a",
)

LEVEL_005 = ValidationRule(
    code="LEVEL-005",
    severity=Severity.WARN,
    message_template="Aligned contexts {context} and {target} are {distance:g} apart or not facing each other",
    remediation_template="Check the alignment offset used when closing the pair",
    description="Aligned contexts normally coincide and face opposite directions",
)

LEVEL_006 = ValidationRule(
    code="LEVEL-006",
    severity=Severity.INFO,
    message_template="{count} open context(s) remain",
    remediation_template="Run a discard-open-contexts or discard-open-chunks policy",
    description="Open contexts are dangling connections left by generation",
)

ALL_RULES = (LEVEL_001, LEVEL_002, LEVEL_003, LEVEL_004, LEVEL_005, LEVEL_006)
