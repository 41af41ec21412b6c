"""Centralized logging configuration for the crew billing system.

The CLI calls ``configure_logging(LoggingConfig.from_env(...))`` once per
invocation. Console output uses a plain one-line format; ``LOG_FORMAT=json``
switches every handler to one JSON object per line, with structured fields
from ``extra=`` and ``LogContext`` merged in after redaction.
"""

import json
import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from src.utils.logging_utils import ContextFilter, sanitize_sensitive_data

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("standard", "json")

STANDARD_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
STANDARD_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord has; anything else came from extra= or LogContext
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with redacted structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        structured = {
            name: value
            for name, value in vars(record).items()
            if name not in _RECORD_ATTRIBUTES and not name.startswith("_")
        }
        entry.update(sanitize_sensitive_data(structured))
        return json.dumps(entry, ensure_ascii=False, default=str)


@dataclass
class LoggingConfig:
    """
    Where and how log records are written.

    Attributes:
        log_level: One of LOG_LEVELS (case-insensitive, stored uppercased)
        log_format: ``standard`` or ``json``
        log_file: Path of the rotating log file
        enable_console: Write to stderr
        enable_file: Write to ``log_file``
        max_file_size: Rotation threshold in bytes
        backup_count: Rotated files to keep

    Raises:
        ValueError: On an unknown level or format, or file logging without
            a file path
    """

    log_level: str = "INFO"
    log_format: str = "standard"
    log_file: Optional[str] = None
    enable_console: bool = True
    enable_file: bool = False
    max_file_size: int = 5 * 1024 * 1024
    backup_count: int = 3

    def __post_init__(self):
        level = self.log_level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. Must be one of {', '.join(LOG_FORMATS)}"
            )
        if self.enable_file and not self.log_file:
            raise ValueError("log_file must be specified when enable_file is True")
        self.log_level = level

    @classmethod
    def from_env(cls, default_level: str = "INFO") -> "LoggingConfig":
        """
        Read LOG_LEVEL, LOG_FORMAT, LOG_FILE and LOG_CONSOLE.

        Setting LOG_FILE turns file logging on.
        """
        log_file = os.getenv("LOG_FILE") or None
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            log_file=log_file,
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() == "true",
            enable_file=log_file is not None,
        )

    def build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return JSONFormatter()
        return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=STANDARD_DATEFMT)

    def build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if self.enable_console:
            handlers.append(logging.StreamHandler())
        if self.enable_file and self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    self.log_file,
                    maxBytes=self.max_file_size,
                    backupCount=self.backup_count,
                    encoding="utf-8",
                )
            )
        return handlers


def _clear_root_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def configure_logging(config: LoggingConfig) -> None:
    """
    Replace the root logger's handlers with the ones ``config`` describes.

    Safe to call repeatedly; earlier handlers are closed first.
    """
    root = logging.getLogger()
    _clear_root_handlers(root)

    level = logging.getLevelName(config.log_level)
    root.setLevel(level)

    formatter = config.build_formatter()
    context_filter = ContextFilter()
    for handler in config.build_handlers():
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)


def reset_logging() -> None:
    """Drop all root handlers and go back to the WARNING default."""
    root = logging.getLogger()
    _clear_root_handlers(root)
    root.setLevel(logging.WARNING)
