"""Billing aggregator for per-technician payment summaries.

This module groups the crew shifts of many production events by technician
(national ID), resolves the payable amount of every shift through the
payment rule table, and flags technicians whose invoices are still missing.
It supports the same filters as the finance view: payment category, event
date range and a technician name fragment.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from src.calculators.payment_rules import (
    BillingFilter,
    is_included_by_filter,
    is_invoice_missing,
    resolve_shift_amount,
)
from src.models.event import ProductionEvent, TechnicianShift

logger = logging.getLogger(__name__)

DateBound = Union[str, dt.date, None]


@dataclass
class ShiftSummary:
    """One shift as it appears in a technician's billing breakdown.

    Attributes:
        event_id: Owning event id (needed to write invoice data back)
        shift_id: Shift id (needed to write invoice data back)
        date: Event date (ISO string)
        event_name: Event title
        role: Job title on this shift
        invoice_number: Invoice reference, if recorded
        amount: Resolved payable amount
        payment_type: Payment category value
    """

    event_id: str
    shift_id: str
    date: str
    event_name: str
    role: str
    invoice_number: Optional[str]
    amount: Decimal
    payment_type: str


@dataclass
class AggregatedTechnician:
    """Billing summary for one technician.

    Attributes:
        person_name: Display name taken from the first matching shift
        dni: National ID used as the grouping key
        shifts: Shift summaries that survived the filters
        total_amount: Sum of the resolved amounts of ``shifts``
        has_missing_invoices: True if any listed shift lacks its invoice

    Example:
        >>> tech = AggregatedTechnician(person_name="Ana Ruiz", dni="1Z")
        >>> tech.total_amount
        Decimal('0')
    """

    person_name: str
    dni: str
    shifts: List[ShiftSummary] = field(default_factory=list)
    total_amount: Decimal = Decimal("0")
    has_missing_invoices: bool = False

    def add_shift(self, summary: ShiftSummary, invoice_missing: bool) -> None:
        """Append a shift and update the running total and missing flag."""
        self.shifts.append(summary)
        self.total_amount += summary.amount
        self.has_missing_invoices = self.has_missing_invoices or invoice_missing


@dataclass
class BillingSummary:
    """Grand totals across all aggregated technicians.

    Attributes:
        technician_count: Number of technicians listed
        shift_count: Number of shifts listed
        total_amount: Sum of all technician totals
        missing_invoice_count: Technicians with at least one missing invoice
    """

    technician_count: int
    shift_count: int
    total_amount: Decimal
    missing_invoice_count: int


def _normalize_bound(value: DateBound) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value).strip() or None


def _matches_name(shift: TechnicianShift, name_filter: Optional[str]) -> bool:
    if not name_filter:
        return True
    return name_filter.lower() in shift.person_name.lower()


def aggregate_technicians(
    events: Iterable[ProductionEvent],
    filter_type: Union[BillingFilter, str] = BillingFilter.ALL,
    start_date: DateBound = None,
    end_date: DateBound = None,
    name_filter: Optional[str] = None,
) -> List[AggregatedTechnician]:
    """Aggregate event shifts into one billing summary per technician.

    Steps:
    1. Skip every event whose date falls outside [start_date, end_date]
       (inclusive, ISO string comparison; either bound may be omitted)
    2. Skip shifts excluded by the payment-category filter
    3. Skip shifts whose technician name does not contain ``name_filter``
       (case-insensitive; spaces in the filter count)
    4. Resolve each remaining shift's amount and missing-invoice flag and
       add it to the technician bucket keyed by national ID

    Shifts without a national ID all share the bucket keyed by ``""``.
    Input events are never modified.

    Args:
        events: Production events with their shifts
        filter_type: ALL or INVOICE_ONLY
        start_date: Earliest event date to include (optional)
        end_date: Latest event date to include (optional)
        name_filter: Technician name fragment (optional)

    Returns:
        Technician summaries in order of first appearance

    Example:
        >>> result = aggregate_technicians(events, "INVOICE_ONLY", "2024-03-01")
        >>> result[0].total_amount
        Decimal('302.5')
    """
    billing_filter = BillingFilter(filter_type)
    start = _normalize_bound(start_date)
    end = _normalize_bound(end_date)
    name_fragment = name_filter or ""

    technicians: Dict[str, AggregatedTechnician] = {}
    skipped_events = 0

    for event in events:
        if start and event.date < start:
            skipped_events += 1
            continue
        if end and event.date > end:
            skipped_events += 1
            continue

        for shift in event.shifts:
            if not is_included_by_filter(shift.payment_type, billing_filter):
                continue
            if not _matches_name(shift, name_fragment):
                continue

            technician = technicians.get(shift.dni)
            if technician is None:
                technician = AggregatedTechnician(
                    person_name=shift.person_name, dni=shift.dni
                )
                technicians[shift.dni] = technician

            summary = ShiftSummary(
                event_id=event.id,
                shift_id=shift.id,
                date=event.date,
                event_name=event.title,
                role=shift.role,
                invoice_number=shift.invoice_number,
                amount=resolve_shift_amount(shift),
                payment_type=shift.payment_type.value,
            )
            technician.add_shift(summary, is_invoice_missing(shift))

    logger.debug(
        f"Aggregated {len(technicians)} technicians "
        f"(filter={billing_filter.value}, skipped {skipped_events} events by date)"
    )
    return list(technicians.values())


def summarize_technicians(technicians: List[AggregatedTechnician]) -> BillingSummary:
    """Compute grand totals for an aggregation result.

    Args:
        technicians: Output of aggregate_technicians

    Returns:
        BillingSummary with counts and the grand total
    """
    if not technicians:
        return BillingSummary(
            technician_count=0,
            shift_count=0,
            total_amount=Decimal("0"),
            missing_invoice_count=0,
        )

    return BillingSummary(
        technician_count=len(technicians),
        shift_count=sum(len(t.shifts) for t in technicians),
        total_amount=sum((t.total_amount for t in technicians), Decimal("0")),
        missing_invoice_count=sum(1 for t in technicians if t.has_missing_invoices),
    )
