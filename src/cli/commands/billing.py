"""Billing commands: per-technician report and invoice data entry."""

from datetime import datetime
from typing import Optional

import click

from src.aggregators.billing_aggregator import summarize_technicians
from src.cli.error_handlers import DataValidationError, with_error_handling
from src.cli.utils.formatters import (
    format_currency,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from src.cli.utils.progress import ProgressTracker
from src.cli.utils.session import get_repository, is_debug
from src.config.settings import get_config
from src.models.base import coerce_decimal
from src.services.production_service import ProductionService
from src.writers.billing_report_generator import BillingReportGenerator
from src.writers.excel_writer import ExcelWorkbookWriter


def _as_date(value: Optional[datetime]):
    return value.date() if value is not None else None


@click.command(name="billing-report")
@click.option(
    "--filter",
    "filter_type",
    type=click.Choice(["ALL", "INVOICE_ONLY"], case_sensitive=False),
    default=None,
    help="Payment categories to include (default from DEFAULT_BILLING_FILTER)",
)
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Earliest event date (YYYY-MM-DD, inclusive)",
)
@click.option(
    "--end-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Latest event date (YYYY-MM-DD, inclusive)",
)
@click.option("--name", "name_filter", default=None, help="Technician name contains")
@click.option("--details", is_flag=True, help="List every billed shift")
@click.option("--export", is_flag=True, help="Also write an Excel workbook")
def billing_report(
    filter_type: Optional[str],
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    name_filter: Optional[str],
    details: bool,
    export: bool,
):
    """Show what is owed to each technician.

    Amounts follow the payment rules: an entered invoice total always wins;
    invoiced categories count as zero until the invoice arrives; Alta Seg.
    Social shifts use the agreed salary.

    Example:
        crew-billing billing-report --filter ALL --start-date 2024-03-01
        crew-billing billing-report --name ruiz --export
    """
    with with_error_handling(is_debug()):
        config = get_config()
        billing_filter = (filter_type or config.default_billing_filter).upper()

        stages = ["Loading events", "Aggregating billing"]
        if export:
            stages.append("Writing workbook")
        tracker = ProgressTracker(stages)
        tracker.start()

        service = ProductionService(get_repository())
        events = service.repository.list_events()
        tracker.advance(f"{len(events)} events")

        technicians = service.billing(
            filter_type=billing_filter,
            start_date=_as_date(start_date),
            end_date=_as_date(end_date),
            name_filter=name_filter,
        )
        summary = summarize_technicians(technicians)
        tracker.advance(f"{summary.technician_count} technicians")

        click.echo()
        if not technicians:
            click.echo(format_info("No shifts match the selected filters."))
            return

        rows = [
            [
                tech.person_name,
                tech.dni or "(sin DNI)",
                len(tech.shifts),
                format_currency(tech.total_amount),
                "FALTAN FACTURAS" if tech.has_missing_invoices else "",
            ]
            for tech in technicians
        ]
        click.echo(format_table(["Nombre", "DNI", "Servicios", "Total", "Facturas"], rows))

        if details:
            for tech in technicians:
                click.echo()
                click.echo(f"{tech.person_name} ({tech.dni or 'sin DNI'})")
                detail_rows = [
                    [
                        shift.date,
                        shift.event_name,
                        shift.role,
                        shift.payment_type,
                        shift.invoice_number or "-",
                        format_currency(shift.amount),
                        shift.event_id,
                        shift.shift_id,
                    ]
                    for shift in tech.shifts
                ]
                click.echo(
                    format_table(
                        ["Fecha", "Evento", "Rol", "Tipo", "Factura", "Importe", "Evento ID", "Turno ID"],
                        detail_rows,
                    )
                )

        click.echo()
        click.echo(
            f"Total: {format_currency(summary.total_amount)} "
            f"({summary.shift_count} services, filter {billing_filter})"
        )
        if summary.missing_invoice_count:
            click.echo(
                format_warning(
                    f"{summary.missing_invoice_count} technician(s) with missing invoices"
                )
            )

        if export:
            report = BillingReportGenerator(technicians).generate()
            path = ExcelWorkbookWriter(config.export_dir).write_billing_report(report)
            tracker.advance()
            click.echo(format_success(f"Workbook written to {path}"))


@click.command(name="update-shift")
@click.argument("event_id")
@click.argument("shift_id")
@click.option("--invoice-number", default=None, help="Invoice reference ('' clears it)")
@click.option("--amount", default=None, help="Invoice total overriding the rules ('' clears it)")
def update_shift(
    event_id: str, shift_id: str, invoice_number: Optional[str], amount: Optional[str]
):
    """Record the invoice number and/or total of one shift.

    Example:
        crew-billing update-shift ev-001 sh-003 --invoice-number F-101 --amount 302.50
    """
    with with_error_handling(is_debug()):
        if invoice_number is None and amount is None:
            raise DataValidationError(
                "Nothing to update", "Pass --invoice-number and/or --amount"
            )

        kwargs = {}
        if invoice_number is not None:
            kwargs["invoice_number"] = invoice_number
        if amount is not None:
            if amount.strip() and coerce_decimal(amount, default=None) is None:
                raise DataValidationError(f"Invalid amount: {amount}", "Use a number such as 302.50")
            kwargs["total_invoice_amount"] = amount

        service = ProductionService(get_repository())
        event = service.update_shift(event_id, shift_id, **kwargs)

        shift = event.find_shift(shift_id)
        if shift is None:
            click.echo(format_warning(f"Shift {shift_id} not found in '{event.title}'; nothing changed"))
            return

        click.echo(
            format_success(
                f"Updated {shift.person_name} in '{event.title}': "
                f"invoice {shift.invoice_number or '-'}, "
                f"total {format_currency(shift.total_invoice_amount) if shift.total_invoice_amount is not None else '-'}"
            )
        )
