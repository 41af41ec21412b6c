"""Error handling shared by all CLI commands."""

import sys
import traceback
from typing import Optional

import click
from googleapiclient.errors import HttpError
from pydantic import ValidationError

from src.cli.utils.formatters import format_error, format_warning
from src.services.errors import (
    CrewBillingError,
    DuplicateCrewMemberError,
    DuplicateUsernameError,
    EventNotFoundError,
    InvalidRecordError,
    SelfDeletionError,
)
from src.services.retry_handler import CircuitBreakerError, RetryExhaustedException


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""


class APIError(CLIError):
    """Error talking to the remote store."""


class DataValidationError(CLIError):
    """Error related to invalid input or stored data."""


class AuthenticationError(CLIError):
    """Wrong username or password."""


def _report(message: str, hint: Optional[str] = None) -> None:
    click.echo(format_error(message), err=True)
    if hint:
        click.echo(format_warning(f"Hint: {hint}"), err=True)


# HTTP status -> (exit code, message, hint)
_HTTP_ERRORS = {
    401: (5, "Authentication Failed", "Check the service account credentials in the .env file"),
    403: (6, "Permission Denied", "Share the data spreadsheet with the service account"),
    404: (7, "Resource Not Found", "Verify DATA_SPREADSHEET_ID in your configuration"),
    429: (8, "Rate Limit Exceeded", "Wait a few minutes before retrying"),
}


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Print a user-friendly message for an error and choose the exit code.

    Exit codes:
        1 configuration, 2 remote store, 3 invalid data, 4 other domain
        error, 5-9 Google API HTTP errors, 7 also for unknown events,
        10 failed login, 130 cancelled, 255 unexpected

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace for unexpected errors

    Returns:
        Exit code
    """
    if isinstance(error, CLIError):
        codes = {
            ConfigurationError: (1, "Configuration Error"),
            APIError: (2, "Remote Store Error"),
            DataValidationError: (3, "Data Validation Error"),
            AuthenticationError: (10, "Login Failed"),
        }
        code, label = codes.get(type(error), (4, "Error"))
        _report(f"{label}: {error.message}", error.recovery_hint)
        return code

    if isinstance(error, ValidationError):
        _report(f"Configuration Error: {error.error_count()} invalid setting(s)", str(error))
        return 1

    if isinstance(error, EventNotFoundError):
        _report(str(error), "Run 'crew-billing list-events' to see event ids")
        return 7

    if isinstance(
        error,
        (InvalidRecordError, DuplicateCrewMemberError, DuplicateUsernameError, SelfDeletionError),
    ):
        _report(str(error))
        return 3

    if isinstance(error, CrewBillingError):
        _report(f"Error: {error}")
        return 4

    if isinstance(error, (RetryExhaustedException, CircuitBreakerError)):
        _report(f"Remote Store Error: {error}", "Check your network connection and retry later")
        return 2

    if isinstance(error, HttpError):
        status_code = error.resp.status
        code, message, hint = _HTTP_ERRORS.get(
            status_code, (9, f"Google API Error (HTTP {status_code})", str(error))
        )
        _report(message, hint)
        return code

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130

    _report(f"Unexpected Error: {type(error).__name__}")
    click.echo(str(error), err=True)
    if debug:
        click.echo("\nFull stack trace:", err=True)
        click.echo(
            "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            err=True,
        )
    else:
        click.echo(format_warning("\nRun with --debug for the full stack trace"), err=True)
    return 255


class ErrorHandler:
    """Context manager that turns exceptions into messages and exit codes."""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is None or isinstance(
            exc_val, (SystemExit, click.exceptions.Exit, click.UsageError)
        ):
            return False
        sys.exit(handle_cli_error(exc_val, self.debug))


def with_error_handling(debug: bool = False) -> ErrorHandler:
    """
    Wrap a command body with the shared error handling.

    Example:
        @cli.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """
    return ErrorHandler(debug)
