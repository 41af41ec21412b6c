"""Event commands: listing, crew editing and crew exports."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import click

from src.calculators.stats_calculator import shift_cost
from src.cli.error_handlers import DataValidationError, with_error_handling
from src.cli.utils.formatters import format_currency, format_info, format_success, format_table
from src.cli.utils.session import get_repository, is_debug
from src.config.settings import get_config
from src.models import PaymentType, Schedule
from src.services.production_service import ProductionService
from src.services.staff_service import StaffDirectory
from src.writers.crew_sheet_generator import EXPORT_COLUMNS, CrewSheetGenerator, event_crew_frame
from src.writers.excel_writer import ExcelWorkbookWriter, timestamped_filename


@click.command(name="list-events")
@click.option("--crew", is_flag=True, help="Show the crew of each event")
def list_events(crew: bool):
    """List production events, newest first.

    Example:
        crew-billing list-events --crew
    """
    with with_error_handling(is_debug()):
        events = ProductionService(get_repository()).list_events_sorted()
        if not events:
            click.echo(format_info("No events stored."))
            return

        rows = [
            [
                event.id,
                event.date,
                event.title,
                len(event.shifts),
                format_currency(sum((shift_cost(s) for s in event.shifts), Decimal("0"))),
            ]
            for event in events
        ]
        click.echo(format_table(["ID", "Fecha", "Evento", "Equipo", "Coste"], rows))

        if crew:
            for event in events:
                click.echo()
                click.echo(f"{event.title} ({event.date})")
                crew_rows = [
                    [s.id, s.role, s.person_name, s.dni, s.payment_type.value, s.schedule.value]
                    for s in event.shifts
                ]
                click.echo(
                    format_table(["Turno ID", "Puesto", "Nombre", "DNI", "Tipo", "Jornada"], crew_rows)
                )

        click.echo()
        click.echo(format_success(f"{len(events)} event(s)"))


@click.command(name="export-crew")
@click.option(
    "--event-id",
    default=None,
    help="Export only this event's crew list (default: every event in one sheet)",
)
@click.option(
    "--columns",
    default=None,
    help=(
        "Comma-separated columns for --event-id: "
        + ", ".join(EXPORT_COLUMNS)
    ),
)
def export_crew(event_id: Optional[str], columns: Optional[str]):
    """Export crew lists to an Excel workbook.

    Without --event-id every event is written to one sheet, newest first,
    with Social Security status, salary and invoice notes per technician.

    Example:
        crew-billing export-crew
        crew-billing export-crew --event-id ev-001 --columns role,personName,phone
    """
    with with_error_handling(is_debug()):
        config = get_config()
        repository = get_repository()
        writer = ExcelWorkbookWriter(config.export_dir)
        staff = repository.list_staff()

        if event_id is None:
            if columns:
                raise DataValidationError("--columns requires --event-id")
            data = CrewSheetGenerator(repository.list_events(), staff).generate()
            path = writer.write_crew_sheet(data)
            click.echo(format_success(f"Exported {len(data.title_rows)} event(s) to {path}"))
            return

        event = ProductionService(repository).get_event(event_id)
        keys = [key.strip() for key in columns.split(",") if key.strip()] if columns else None
        try:
            frame = event_crew_frame(event, staff, keys)
        except ValueError as e:
            raise DataValidationError(str(e), "Valid columns: " + ", ".join(EXPORT_COLUMNS)) from e

        path = writer.write_frames({"Equipo": frame}, timestamped_filename(f"Equipo_{event.id}"))
        click.echo(format_success(f"Exported crew of '{event.title}' to {path}"))


@click.command(name="create-event")
@click.option("--title", required=True)
@click.option(
    "--date", "event_date", required=True, type=click.DateTime(formats=["%Y-%m-%d"])
)
def create_event(title: str, event_date: datetime):
    """Create an event without crew.

    Example:
        crew-billing create-event --title "Gala de Premios" --date 2024-03-15
    """
    with with_error_handling(is_debug()):
        event = ProductionService(get_repository()).save_event(title, event_date.date(), [])
        click.echo(format_success(f"Created event '{event.title}' ({event.id})"))


@click.command(name="add-crew")
@click.argument("event_id")
@click.option("--dni", default="", help="National ID; fills name and role from the staff directory")
@click.option("--name", "person_name", default=None, help="Technician name")
@click.option("--role", default=None, help="Job title on this event")
@click.option(
    "--payment-type",
    type=click.Choice([p.value for p in PaymentType if p != PaymentType.UNKNOWN], case_sensitive=False),
    default=None,
    help="Payment category (default: the technician's usual one)",
)
@click.option("--salary", default=None, help="Agreed salary")
@click.option(
    "--schedule",
    type=click.Choice([s.value for s in Schedule], case_sensitive=False),
    default=Schedule.FULL.value,
    show_default=True,
)
@click.option("--notes", default=None)
@click.option("--ss-start", default=None, help="Social Security start date (Alta Seg. Social)")
@click.option("--ss-end", default=None, help="Social Security end date (Alta Seg. Social)")
def add_crew(
    event_id: str,
    dni: str,
    person_name: Optional[str],
    role: Optional[str],
    payment_type: Optional[str],
    salary: Optional[str],
    schedule: str,
    notes: Optional[str],
    ss_start: Optional[str],
    ss_end: Optional[str],
):
    """Add a technician to an event's crew.

    Example:
        crew-billing add-crew ev-001 --dni 00000003A --salary 180 --schedule Media
    """
    with with_error_handling(is_debug()):
        repository = get_repository()
        service = ProductionService(repository)
        event = service.get_event(event_id)

        member = StaffDirectory(repository).find_by_dni(dni) if dni else None
        if member is not None:
            person_name = person_name or member.full_name
            role = role or member.role
            payment_type = payment_type or member.payment_type.value

        shift = service.build_shift(
            role=role or "",
            person_name=person_name or "",
            payment_type=payment_type or "",
            dni=dni,
            agreed_salary=salary,
            schedule=schedule,
            notes=notes,
            social_security_start_date=ss_start,
            social_security_end_date=ss_end,
        )
        crew = service.add_shift(event.shifts, shift)
        saved = service.save_event(event.title, event.date, crew, event_id=event.id)
        click.echo(
            format_success(
                f"Added {shift.person_name} as {shift.role} to '{saved.title}' "
                f"({len(saved.shifts)} in crew)"
            )
        )


@click.command(name="delete-event")
@click.argument("event_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def delete_event(event_id: str, yes: bool):
    """Delete an event and its crew."""
    with with_error_handling(is_debug()):
        service = ProductionService(get_repository())
        event = service.get_event(event_id)
        if not yes:
            click.confirm(f"Delete '{event.title}' ({event.date})?", abort=True)
        service.delete_event(event_id)
        click.echo(format_success(f"Deleted event {event_id}"))
