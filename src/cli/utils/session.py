"""Shared access to configuration and storage for CLI commands."""

import click

from src.config.settings import get_config
from src.repositories import DataRepository, create_repository


def get_repository() -> DataRepository:
    """Open the configured document store."""
    return create_repository(get_config())


def is_debug() -> bool:
    """Whether the current command runs with ``--debug``."""
    ctx = click.get_current_context(silent=True)
    return bool(ctx is not None and isinstance(ctx.obj, dict) and ctx.obj.get("debug"))
