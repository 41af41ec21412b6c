"""Validate data command."""

import click

from src.cli.error_handlers import with_error_handling
from src.cli.utils.formatters import format_error, format_info, format_success, format_warning
from src.cli.utils.session import get_repository, is_debug
from src.validators.event_validator import EventValidator
from src.validators.validation_report import ValidationSeverity

MAX_ISSUES_PER_SEVERITY = 20

_STYLES = {
    ValidationSeverity.ERROR: format_error,
    ValidationSeverity.WARNING: format_warning,
    ValidationSeverity.INFO: format_info,
}


@click.command(name="validate-data")
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    help="Minimum severity level to display (default: warning)",
)
@click.pass_context
def validate_data(ctx: click.Context, severity: str):
    """Check stored events for data that distorts billing.

    Flags shifts without DNI, Alta Seg. Social shifts without valid Social
    Security dates, pending invoices, shifts filed under the wrong event and
    people listed twice in one event.

    Exits with status 1 if errors are found.

    Example:
        crew-billing validate-data --severity info
    """
    with with_error_handling(is_debug()):
        minimum = ValidationSeverity[severity.upper()]
        events = get_repository().list_events()
        click.echo(format_info(f"Validating {len(events)} event(s)..."))

        report = EventValidator().validate_events(events)

        click.echo()
        click.echo(f"Summary: {report.summary()}")

        for level in (ValidationSeverity.ERROR, ValidationSeverity.WARNING, ValidationSeverity.INFO):
            if level < minimum:
                continue
            issues = report.issues_with(level)
            if not issues:
                continue
            click.echo()
            click.echo(f"{level.name}S ({len(issues)}):")
            for issue in issues[:MAX_ISSUES_PER_SEVERITY]:
                context = ""
                if issue.context:
                    context = " [" + ", ".join(f"{k}={v}" for k, v in issue.context.items()) + "]"
                click.echo(_STYLES[level](f"  {issue.field}: {issue.message}{context}"))
            if len(issues) > MAX_ISSUES_PER_SEVERITY:
                click.echo(f"  ... and {len(issues) - MAX_ISSUES_PER_SEVERITY} more")

        click.echo()
        if report.has_errors():
            click.echo(format_error(f"Validation failed with {report.error_count} error(s)"))
            ctx.exit(1)
        elif report.warning_count:
            click.echo(format_warning(f"Validation completed with {report.warning_count} warning(s)"))
        else:
            click.echo(format_success("Validation passed"))
