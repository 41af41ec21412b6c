"""
Classification of remote store errors into retryable and fatal.
"""

import logging
import socket
from enum import Enum
from typing import Dict, Optional

import requests.exceptions
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

NETWORK_ERRORS = (
    socket.timeout,
    ConnectionError,
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)


class ErrorType(Enum):
    """Classification of error types."""

    RETRYABLE = "retryable"  # 429, 5xx, network errors
    FATAL = "fatal"  # other 4xx (bad range, missing permission, ...)
    UNKNOWN = "unknown"


def http_status(exception: Exception) -> Optional[int]:
    """Return the HTTP status of a Google API error, or None."""
    if isinstance(exception, HttpError):
        return exception.resp.status
    return None


class ErrorClassifier:
    """
    Decides whether a failed Google Sheets call is worth repeating.

    Rate limiting and server errors are transient, as are dropped
    connections. Client errors such as a missing spreadsheet or a service
    account without access will fail the same way every time.
    """

    def __init__(self):
        self._counts: Dict[ErrorType, int] = {error_type: 0 for error_type in ErrorType}

    def classify(self, exception: Exception) -> ErrorType:
        """
        Classify an exception.

        Args:
            exception: The exception raised by an API call

        Returns:
            ErrorType classification
        """
        error_type = self._classify(exception)
        self._counts[error_type] += 1
        return error_type

    def _classify(self, exception: Exception) -> ErrorType:
        status = http_status(exception)
        if status is not None:
            if status == 429 or 500 <= status < 600:
                return ErrorType.RETRYABLE
            if 400 <= status < 500:
                return ErrorType.FATAL
            return ErrorType.UNKNOWN

        if isinstance(exception, NETWORK_ERRORS):
            return ErrorType.RETRYABLE

        return ErrorType.UNKNOWN

    def is_retryable(self, exception: Exception) -> bool:
        """True if the exception is transient."""
        return self.classify(exception) == ErrorType.RETRYABLE

    def describe(self, exception: Exception) -> str:
        """
        Get a human-readable description of an exception.

        Example:
            >>> classifier.describe(http_error_429)
            'Rate limit exceeded (HTTP 429) - retryable'
        """
        error_type = self._classify(exception)
        status = http_status(exception)

        if status == 429:
            text = "Rate limit exceeded (HTTP 429)"
        elif status == 403:
            text = "Permission denied (HTTP 403)"
        elif status == 404:
            text = "Spreadsheet or range not found (HTTP 404)"
        elif status is not None and status >= 500:
            text = f"Server error (HTTP {status})"
        elif status is not None:
            text = f"Client error (HTTP {status})"
        elif isinstance(exception, (socket.timeout, requests.exceptions.Timeout)):
            text = "Network timeout"
        elif isinstance(exception, NETWORK_ERRORS):
            text = "Network connection error"
        else:
            text = f"{type(exception).__name__}: {exception}"

        return f"{text} - {error_type.value}"

    def get_statistics(self) -> Dict[str, int]:
        """Counts per classification plus a total."""
        stats = {error_type.value: count for error_type, count in self._counts.items()}
        stats["total"] = sum(self._counts.values())
        return stats

    def reset_statistics(self) -> None:
        self._counts = {error_type: 0 for error_type in ErrorType}
