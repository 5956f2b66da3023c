"""
Core data structures for dungeon validation.

- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when a dungeon fails validation
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..pipeline.errors import GenerationError


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, doesn't affect pass/fail
    - WARN: Degraded but usable layout
    - FAIL: Broken invariant
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class ValidationIssue:
    """Represents a single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "WALL-001")
        message: Human-readable description
        location: Optional location info (tile, room id, edge)
    """
    severity: Severity
    code: str
    message: str
    location: Optional[str] = None

    def format(self) -> str:
        """Format issue as ``[SEVERITY] CODE at=LOCATION :: message``."""
        location = self.location or '-'
        return f"[{self.severity}] {self.code} at={location} :: {self.message}"

    def __str__(self) -> str:
        return self.format()


class ValidationError(GenerationError):
    """Raised when validation finds FAIL issues."""

    def __init__(self, result: 'ValidationResult'):
        self.result = result
        super().__init__(result.report())


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination."""
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if no FAIL issues were recorded."""
        return not any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one; returns self for chaining."""
        self.issues.extend(other.issues)
        return self

    def raise_if_failed(self) -> None:
        if self.failed:
            raise ValidationError(self)

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

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'passed': self.passed,
            'issue_count': len(self.issues),
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'location': issue.location,
                }
                for issue in self.issues
            ],
        }
