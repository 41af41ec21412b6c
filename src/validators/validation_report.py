"""Validation report for collecting and formatting data quality issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: The severity level of the issue
        field: The record field the issue is about
        message: Human-readable description of the issue
        value: The offending value
        context: Where the issue was found (event, shift, technician)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_str = " (" + ", ".join(f"{k}={v}" for k, v in self.context.items()) + ")"
        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues.

    Only errors make a report invalid; warnings and info messages are shown
    to the user but do not block anything.

    Example:
        >>> report = ValidationReport()
        >>> report.add_warning("dni", "Shift has no DNI", "", {"event": "e1"})
        >>> report.is_valid()
        True
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def _add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]],
    ) -> None:
        self.issues.append(ValidationIssue(severity, field, message, value, context))

    def add_error(
        self, field: str, message: str, value: Any, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self._add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(
        self, field: str, message: str, value: Any, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self._add(ValidationSeverity.WARNING, field, message, value, context)

    def add_info(
        self, field: str, message: str, value: Any, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self._add(ValidationSeverity.INFO, field, message, value, context)

    def issues_with(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        """All issues of one severity, in the order they were added."""
        return [issue for issue in self.issues if issue.severity == severity]

    def get_errors(self) -> List[ValidationIssue]:
        return self.issues_with(ValidationSeverity.ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self.issues_with(ValidationSeverity.WARNING)

    @property
    def error_count(self) -> int:
        return len(self.get_errors())

    @property
    def warning_count(self) -> int:
        return len(self.get_warnings())

    @property
    def info_count(self) -> int:
        return len(self.issues_with(ValidationSeverity.INFO))

    def is_valid(self) -> bool:
        """True when the report has no errors."""
        return self.error_count == 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def merge(self, other: "ValidationReport") -> None:
        """Append the issues of another report."""
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """One-line issue count, e.g. ``"1 error(s), 2 warning(s)"``."""
        parts = []
        if self.error_count:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning(s)")
        if self.info_count:
            parts.append(f"{self.info_count} info message(s)")
        return ", ".join(parts) if parts else "No issues found"

    def format(self) -> str:
        """Multi-line report grouped by severity, most severe first."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}", "=" * 60]
        for severity, heading in (
            (ValidationSeverity.ERROR, "ERRORS"),
            (ValidationSeverity.WARNING, "WARNINGS"),
            (ValidationSeverity.INFO, "INFO"),
        ):
            issues = self.issues_with(severity)
            if issues:
                lines.append(f"\n{heading}:")
                lines.extend(f"  - {issue}" for issue in issues)
        return "\n".join(lines)
