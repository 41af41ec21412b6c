"""Validation layer for data quality checks."""

from src.validators.event_validator import EventValidator
from src.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "EventValidator",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
]
