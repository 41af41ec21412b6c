"""Storage commands: remote seeding, backup and restore."""

from pathlib import Path
from typing import Optional

import click

from src.cli.error_handlers import APIError, ConfigurationError, with_error_handling
from src.cli.utils.formatters import format_info, format_success
from src.cli.utils.session import get_repository, is_debug
from src.config.settings import get_config
from src.repositories.factory import create_sheets_repository
from src.repositories.local_repository import LocalJsonRepository
from src.services.backup_service import BackupService
from src.writers.excel_writer import timestamped_filename


@click.command(name="seed-remote")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def seed_remote(yes: bool):
    """Upload the local events, staff and users to the spreadsheet store.

    Meant for the first load: whatever the spreadsheet holds is replaced.
    Staff records are keyed by DNI.
    """
    with with_error_handling(is_debug()):
        config = get_config()
        if not config.data_spreadsheet_id:
            raise ConfigurationError(
                "DATA_SPREADSHEET_ID is not set",
                "Add the id of the shared spreadsheet to your .env file",
            )

        if not yes:
            click.confirm(
                "This replaces all data in the spreadsheet store. Continue?", abort=True
            )

        local = LocalJsonRepository(config.local_data_dir)
        events, staff, users = local.list_events(), local.list_staff(), local.list_users()

        try:
            remote = create_sheets_repository(config)
        except Exception as e:
            raise APIError(
                f"Could not connect to spreadsheet {config.data_spreadsheet_id}: {e}",
                "Check the service account credentials and spreadsheet sharing",
            ) from e

        remote.seed(events, staff, users)
        click.echo(
            format_success(
                f"Uploaded {len(events)} events, {len(staff)} staff and {len(users)} users"
            )
        )


@click.command(name="backup")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Backup file (default: <EXPORT_DIR>/Backup_<timestamp>.json)",
)
def backup(output: Optional[Path]):
    """Write every event, staff record and user to one JSON file."""
    with with_error_handling(is_debug()):
        if output is None:
            output = Path(get_config().export_dir) / timestamped_filename("Backup", "json")
        path = BackupService(get_repository()).create_backup(output)
        click.echo(format_success(f"Backup written to {path}"))


@click.command(name="restore")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def restore(backup_file: Path, yes: bool):
    """Replace the stored data with the contents of a backup file."""
    with with_error_handling(is_debug()):
        if not yes:
            click.confirm("This replaces all stored data. Continue?", abort=True)
        click.echo(format_info(f"Restoring {backup_file}..."))
        counts = BackupService(get_repository()).restore_backup(backup_file)
        click.echo(
            format_success(
                f"Restored {counts['events']} events, {counts['staff']} staff "
                f"and {counts['users']} users"
            )
        )
