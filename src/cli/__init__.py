"""Crew Billing CLI.

Command-line interface for crew staffing and billing: events and their
crew, the staff directory, application users, billing reports, Excel
exports, validation and backups.
"""

import click

from src.cli.commands import (
    add_staff,
    add_crew,
    add_user,
    backup,
    billing_report,
    create_event,
    delete_event,
    delete_user,
    export_crew,
    list_events,
    list_staff,
    list_users,
    login,
    restore,
    seed_remote,
    stats,
    update_shift,
    validate_data,
)
from src.cli.error_handlers import ConfigurationError, with_error_handling
from src.config.logging_config import LoggingConfig, configure_logging

__version__ = "1.0.0"


@click.group(help="Crew Billing CLI - Staff audiovisual events and bill their crews")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Verbose logging and full tracebacks")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Crew Billing CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    with with_error_handling(debug):
        try:
            logging_config = LoggingConfig.from_env(default_level="WARNING")
        except ValueError as e:
            raise ConfigurationError(str(e), "Fix LOG_LEVEL / LOG_FORMAT in your .env file") from e
        if debug:
            logging_config.log_level = "DEBUG"
        configure_logging(logging_config)


# Register commands
cli.add_command(billing_report)
cli.add_command(update_shift)
cli.add_command(list_events)
cli.add_command(create_event)
cli.add_command(add_crew)
cli.add_command(delete_event)
cli.add_command(export_crew)
cli.add_command(stats)
cli.add_command(list_staff)
cli.add_command(add_staff)
cli.add_command(validate_data)
cli.add_command(login)
cli.add_command(list_users)
cli.add_command(add_user)
cli.add_command(delete_user)
cli.add_command(seed_remote)
cli.add_command(backup)
cli.add_command(restore)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
