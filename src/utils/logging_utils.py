"""Structured logging utilities with context support."""

import functools
import logging
import threading
from typing import Any, Callable, Dict, Optional

_thread_local = threading.local()

# Field names whose values never reach log output
SENSITIVE_FIELDS = {
    "password",
    "token",
    "api_key",
    "secret",
    "private_key",
    "credentials",
    "authorization",
    "bank_account",
    "bankaccount",
}

REDACTED = "***REDACTED***"


def _current_context() -> Dict[str, Any]:
    return getattr(_thread_local, "context", {})


class LogContext:
    """
    Context manager that attaches structured fields to log records.

    Example:
        with LogContext(event_id="e1", shift_id="s1"):
            logger.info("Updating shift")
            # The record carries event_id and shift_id attributes
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._previous: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "LogContext":
        self._previous = _current_context()
        _thread_local.context = {**self._previous, **self.fields}
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _thread_local.context = self._previous or {}


class ContextFilter(logging.Filter):
    """Logging filter that copies LogContext fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _current_context().items():
            setattr(record, key, value)
        return True


def sanitize_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact sensitive values in a dictionary, recursing into nested dicts.

    Args:
        data: Dictionary to sanitize

    Returns:
        New dictionary with sensitive values replaced by a marker

    Example:
        >>> sanitize_sensitive_data({"username": "ana", "password": "x"})
        {'username': 'ana', 'password': '***REDACTED***'}
    """
    if not isinstance(data, dict):
        return data

    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_FIELDS):
            sanitized[key] = REDACTED if value is not None else None
        elif isinstance(value, dict):
            sanitized[key] = sanitize_sensitive_data(value)
        else:
            sanitized[key] = value
    return sanitized


def log_operation(func: Optional[Callable] = None, *, level: str = "DEBUG") -> Callable:
    """
    Decorator that logs entry, exit and failure of a storage operation.

    Arguments are not logged, since they may carry user records.

    Example:
        @log_operation
        def save_event(self, event):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())
            logger.log(log_level, f"Entering {f.__qualname__}")
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(f"{f.__qualname__} failed: {type(e).__name__}: {e}")
                raise
            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
