"""
Services for the crew billing system.

Remote store access (Google Sheets with retries and a circuit breaker) and
the domain services used by the CLI.
"""

from .errors import (
    CrewBillingError,
    DuplicateCrewMemberError,
    DuplicateUsernameError,
    EventNotFoundError,
    InvalidRecordError,
    SelfDeletionError,
)
from .error_classifier import ErrorClassifier, ErrorType
from .retry_handler import CircuitBreakerError, RetryExhaustedException, RetryHandler
from .google_sheets_service import GoogleSheetsService
from .backup_service import BackupService
from .production_service import ProductionService
from .staff_service import StaffDirectory
from .user_service import UserService

__all__ = [
    "CrewBillingError",
    "DuplicateCrewMemberError",
    "DuplicateUsernameError",
    "EventNotFoundError",
    "InvalidRecordError",
    "SelfDeletionError",
    "ErrorClassifier",
    "ErrorType",
    "RetryHandler",
    "RetryExhaustedException",
    "CircuitBreakerError",
    "GoogleSheetsService",
    "BackupService",
    "ProductionService",
    "StaffDirectory",
    "UserService",
]
