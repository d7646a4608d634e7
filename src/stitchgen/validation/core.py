"""
Core data structures for level validation.

- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationIssue: Individual finding about a level
- ValidationResult: Collection of issues with pass/fail status
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..errors import ValidationError


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, logged but doesn't affect pass/fail
    - WARN: Suspicious but usable level
    - FAIL: Broken level invariant
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


_LOG_LEVELS = {
    Severity.INFO: logging.DEBUG,
    Severity.WARN: logging.WARNING,
    Severity.FAIL: logging.ERROR,
}


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "LEVEL-001")
        message: Human-readable description
        remediation: Optional suggested fix
        location: Optional position of the offending chunk or context
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    location: Optional[str] = None

    def format(self) -> str:
        """Format as: [SEVERITY] CODE location=L :: message :: fix=FIX"""
        location = self.location or '-'
        fix = self.remediation or 'N/A'
        return f"[{self.severity}] {self.code} location={location} :: {self.message} :: fix={fix}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination."""
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Check if validation passed (no FAIL issues)."""
        return not self.failed

    @property
    def failed(self) -> bool:
        return any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one and return self."""
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Multi-line report of all issues, grouped by severity."""
        if not self.issues:
            return "Validation passed: No issues found"

        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}: {len(self.issues)} issue(s)", "-" * 60]
        for severity in [Severity.FAIL, Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append(issue.format())
        return "\n".join(lines)

    def log(self, logger: logging.Logger) -> None:
        """Log each issue at the level matching its severity."""
        for issue in self.issues:
            logger.log(_LOG_LEVELS[issue.severity], issue.format())

    def raise_for_failures(self) -> 'ValidationResult':
        """Raise ValidationError if any FAIL issue is present."""
        if self.failed:
            raise ValidationError(self)
        return self

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'passed': self.passed,
            'issue_count': len(self.issues),
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'info_count': len(self.infos),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'remediation': issue.remediation,
                    'location': issue.location,
                }
                for issue in self.issues
            ]
        }
