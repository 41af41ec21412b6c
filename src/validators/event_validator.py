"""Data quality checks over stored production events."""

import logging
from typing import Dict, Iterable

from src.calculators.payment_rules import requires_invoice
from src.models import PaymentType, ProductionEvent, TechnicianShift
from src.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


class EventValidator:
    """
    Checks events for problems that distort billing.

    Errors:
    - a shift whose event id differs from its event
    - the same person listed twice in one event (same DNI or same name,
      ignoring case)

    Warnings:
    - a shift without DNI; all such shifts are billed as one technician
    - an Alta Seg. Social shift without Social Security dates, or whose
      end date is before its start date

    Info:
    - an invoiced shift that has no invoice number yet
    """

    def validate_events(self, events: Iterable[ProductionEvent]) -> ValidationReport:
        report = ValidationReport()
        event_count = 0
        for event in events:
            event_count += 1
            self._validate_event(event, report)

        logger.info(f"Validated {event_count} events: {report.summary()}")
        return report

    def _validate_event(self, event: ProductionEvent, report: ValidationReport) -> None:
        seen_dni: Dict[str, str] = {}
        seen_names: Dict[str, str] = {}

        for shift in event.shifts:
            context = {"event": event.title or event.id, "shift": shift.id}

            if shift.event_id and shift.event_id != event.id:
                report.add_error(
                    "event_id",
                    f"Shift belongs to event {shift.event_id}, stored under {event.id}",
                    shift.event_id,
                    context,
                )

            dni_key = shift.dni.lower()
            name_key = shift.person_name.strip().lower()
            if (dni_key and dni_key in seen_dni) or (name_key and name_key in seen_names):
                report.add_error(
                    "person_name",
                    "Person appears more than once in this event",
                    shift.person_name,
                    context,
                )
            if dni_key:
                seen_dni[dni_key] = shift.id
            if name_key:
                seen_names[name_key] = shift.id

            self._validate_shift(shift, report, context)

    def _validate_shift(
        self, shift: TechnicianShift, report: ValidationReport, context: dict
    ) -> None:
        if not shift.dni:
            report.add_warning(
                "dni",
                "Shift has no DNI; it is billed together with every other shift without DNI",
                shift.person_name,
                context,
            )

        if shift.payment_type == PaymentType.ALTA_SEG_SOCIAL:
            start = shift.social_security_start_date
            end = shift.social_security_end_date
            if not start or not end:
                report.add_warning(
                    "social_security_dates",
                    "Alta Seg. Social shift without Social Security dates",
                    f"{start or '-'} / {end or '-'}",
                    context,
                )
            elif end < start:
                report.add_warning(
                    "social_security_dates",
                    "Social Security end date is before the start date",
                    f"{start} / {end}",
                    context,
                )

        if requires_invoice(shift.payment_type) and not shift.invoice_number:
            report.add_info(
                "invoice_number",
                f"Invoice pending for {shift.person_name or 'unnamed technician'}",
                None,
                context,
            )
