"""
Production events and their crews.

Creating an event and editing its crew, recording invoice data on a shift,
and computing the billing view over the stored events.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from src.aggregators.billing_aggregator import AggregatedTechnician, aggregate_technicians
from src.calculators.payment_rules import BillingFilter
from src.models import PaymentType, ProductionEvent, Schedule, TechnicianShift, generate_id
from src.models.base import coerce_text
from src.repositories.base import DataRepository
from src.services.errors import DuplicateCrewMemberError, EventNotFoundError, InvalidRecordError

logger = logging.getLogger(__name__)

_UNSET = object()


def _same_person(a: TechnicianShift, b: TechnicianShift) -> bool:
    if a.dni and b.dni and a.dni.lower() == b.dni.lower():
        return True
    return a.person_name.strip().lower() == b.person_name.strip().lower()


def find_duplicate(
    shifts: Iterable[TechnicianShift], candidate: TechnicianShift
) -> Optional[TechnicianShift]:
    """
    Find a shift for the same person as ``candidate``.

    Two shifts belong to the same person when their DNIs match or their
    names match, both ignoring case. A shift with the candidate's own id is
    the candidate being edited and never counts.
    """
    for shift in shifts:
        if candidate.id and shift.id == candidate.id:
            continue
        if _same_person(shift, candidate):
            return shift
    return None


class ProductionService:
    """Event and crew management on top of a DataRepository."""

    def __init__(self, repository: DataRepository):
        self.repository = repository

    def build_shift(
        self,
        role: str,
        person_name: str,
        payment_type: Union[PaymentType, str],
        dni: str = "",
        agreed_salary: Any = None,
        schedule: Union[Schedule, str] = Schedule.FULL,
        notes: Optional[str] = None,
        social_security_start_date: Optional[str] = None,
        social_security_end_date: Optional[str] = None,
        shift_id: Optional[str] = None,
    ) -> TechnicianShift:
        """
        Build a crew shift from form input.

        Social Security dates are only kept for Alta Seg. Social shifts.

        Raises:
            InvalidRecordError: If the role, name or payment type is missing,
                or the payment type is not recognized
        """
        if not coerce_text(role) or not coerce_text(person_name):
            raise InvalidRecordError("Name, role and payment type are required")

        parsed_type = PaymentType.parse(payment_type)
        if parsed_type == PaymentType.UNKNOWN:
            raise InvalidRecordError(f"Unrecognized payment type: {payment_type!r}")

        is_alta = parsed_type == PaymentType.ALTA_SEG_SOCIAL
        return TechnicianShift(
            id=shift_id or generate_id(),
            role=role,
            person_name=person_name,
            dni=dni,
            agreed_salary=agreed_salary,
            payment_type=parsed_type,
            schedule=schedule,
            notes=notes,
            social_security_start_date=social_security_start_date if is_alta else None,
            social_security_end_date=social_security_end_date if is_alta else None,
        )

    def add_shift(
        self, shifts: List[TechnicianShift], shift: TechnicianShift
    ) -> List[TechnicianShift]:
        """
        Add a shift to a crew list, or replace the shift with the same id.

        Returns:
            A new list; ``shifts`` is not modified

        Raises:
            DuplicateCrewMemberError: If the person is already on the crew
        """
        duplicate = find_duplicate(shifts, shift)
        if duplicate is not None:
            raise DuplicateCrewMemberError(shift.person_name, shift.dni)

        if any(existing.id == shift.id for existing in shifts):
            return [shift if existing.id == shift.id else existing for existing in shifts]
        return [*shifts, shift]

    def save_event(
        self,
        title: str,
        date: Any,
        shifts: Iterable[TechnicianShift],
        event_id: Optional[str] = None,
    ) -> ProductionEvent:
        """
        Create or replace an event with its crew.

        Args:
            title: Event title
            date: Event date (ISO string or date)
            shifts: Crew shifts in display order
            event_id: Id of the event being edited; a new id is generated
                when omitted

        Raises:
            InvalidRecordError: If the title or date is blank
            DuplicateCrewMemberError: If the crew lists a person twice
        """
        crew: List[TechnicianShift] = []
        for shift in shifts:
            crew = self.add_shift(crew, shift)

        event = ProductionEvent(id=event_id or generate_id(), title=title, date=date, shifts=crew)
        if not event.title or not event.date:
            raise InvalidRecordError("Event title and date are required")

        return self.repository.save_event(event)

    def get_event(self, event_id: str) -> ProductionEvent:
        """
        Raises:
            EventNotFoundError: If the event does not exist
        """
        event = self.repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def delete_event(self, event_id: str) -> None:
        if not self.repository.delete_event(event_id):
            raise EventNotFoundError(event_id)
        logger.info(f"Deleted event {event_id}")

    def update_shift(
        self,
        event_id: str,
        shift_id: str,
        invoice_number: Any = _UNSET,
        total_invoice_amount: Any = _UNSET,
    ) -> ProductionEvent:
        """
        Record invoice data for one shift.

        Only the arguments that are passed are changed. A blank invoice
        number or amount clears the field.

        Raises:
            EventNotFoundError: If the event does not exist
        """
        updates: Dict[str, Any] = {}
        if invoice_number is not _UNSET:
            updates["invoice_number"] = invoice_number
        if total_invoice_amount is not _UNSET:
            updates["total_invoice_amount"] = total_invoice_amount

        event = self.repository.update_shift(event_id, shift_id, updates)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_events_sorted(self) -> List[ProductionEvent]:
        """All events, newest first."""
        return sorted(self.repository.list_events(), key=lambda e: e.date, reverse=True)

    def billing(
        self,
        filter_type: Union[BillingFilter, str] = BillingFilter.ALL,
        start_date: Any = None,
        end_date: Any = None,
        name_filter: Optional[str] = None,
    ) -> List[AggregatedTechnician]:
        """Per-technician billing over all stored events."""
        return aggregate_technicians(
            self.repository.list_events(),
            filter_type=filter_type,
            start_date=start_date,
            end_date=end_date,
            name_filter=name_filter,
        )
