"""CLI commands."""

from src.cli.commands.billing import billing_report, update_shift
from src.cli.commands.events import (
    add_crew,
    create_event,
    delete_event,
    export_crew,
    list_events,
)
from src.cli.commands.staff import add_staff, list_staff
from src.cli.commands.stats import stats
from src.cli.commands.storage import backup, restore, seed_remote
from src.cli.commands.users import add_user, delete_user, list_users, login
from src.cli.commands.validate import validate_data

__all__ = [
    "add_crew",
    "add_staff",
    "add_user",
    "backup",
    "billing_report",
    "create_event",
    "delete_event",
    "delete_user",
    "export_crew",
    "list_events",
    "list_staff",
    "list_users",
    "login",
    "restore",
    "seed_remote",
    "stats",
    "update_shift",
    "validate_data",
]
