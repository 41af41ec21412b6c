"""Crew sheets: the all-events production workbook and per-event crew lists."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from src.models import PaymentType, ProductionEvent, StaffMember, TechnicianShift
from src.writers.billing_report_generator import format_display_date

CREW_HEADER = ["Puesto", "Nombre", "DNI", "Alta Seg. Social", "Sueldo", "Observación", "Jornada"]
CREW_COLUMN_WIDTHS = [25, 35, 12, 20, 10, 40, 15]
CREW_SHEET_NAME = "Producción Completa"

# Selectable columns for a single event's crew list, in display order
EXPORT_COLUMNS: Dict[str, str] = {
    "role": "Puesto",
    "personName": "Nombre Completo",
    "dni": "DNI",
    "phone": "Teléfono",
    "email": "Email",
    "schedule": "Horario/Jornada",
    "paymentType": "Tipo Pago",
    "socialSecurityNumber": "Seguridad Social",
    "bankAccount": "IBAN / Cuenta",
    "province": "Provincia",
    "notes": "Notas",
    "agreedSalary": "Tarifa",
}
DEFAULT_EXPORT_COLUMNS = ["role", "personName", "dni", "schedule"]


def _money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def _staff_by_dni(staff: Iterable[StaffMember]) -> Dict[str, StaffMember]:
    lookup: Dict[str, StaffMember] = {}
    for member in staff:
        if member.dni and member.dni not in lookup:
            lookup[member.dni] = member
    return lookup


@dataclass
class CrewSheetData:
    """Rows of the all-events crew sheet.

    Attributes:
        rows: Cell values, one list per row (spacer rows are empty lists)
        title_rows: Indexes of the event title rows
        header_rows: Indexes of the column header rows
    """

    rows: List[List[str]] = field(default_factory=list)
    title_rows: List[int] = field(default_factory=list)
    header_rows: List[int] = field(default_factory=list)


class CrewSheetGenerator:
    """Build the crew sheet listing every event, newest first.

    Each event contributes a title row ``"<title> (dd/mm/yyyy)"``, the
    column header row, one row per shift and an empty spacer row.
    Social Security numbers are looked up in the staff directory by DNI.
    """

    def __init__(self, events: Iterable[ProductionEvent], staff: Iterable[StaffMember]):
        self.events = sorted(events, key=lambda e: e.date, reverse=True)
        self.staff_lookup = _staff_by_dni(staff)

    def generate(self) -> CrewSheetData:
        data = CrewSheetData()
        for event in self.events:
            data.title_rows.append(len(data.rows))
            data.rows.append([f"{event.title} ({format_display_date(event.date)})"])

            data.header_rows.append(len(data.rows))
            data.rows.append(list(CREW_HEADER))

            data.rows.extend(self._shift_row(shift) for shift in event.shifts)
            data.rows.append([])
        return data

    def _shift_row(self, shift: TechnicianShift) -> List[str]:
        return [
            shift.role,
            shift.person_name,
            shift.dni,
            self._social_security_cell(shift),
            f"{_money(shift.agreed_salary)} €" if shift.agreed_salary else "-",
            self._observations_cell(shift),
            shift.schedule.value,
        ]

    def _social_security_cell(self, shift: TechnicianShift) -> str:
        if shift.payment_type == PaymentType.ALTA_SEG_SOCIAL:
            member = self.staff_lookup.get(shift.dni)
            if member is not None and member.social_security_number:
                return f"Sí ({member.social_security_number})"
            return "Sí (Nº SS pendiente)"
        if shift.payment_type == PaymentType.COOPERATIVA:
            return "No"
        return "-"

    def _observations_cell(self, shift: TechnicianShift) -> str:
        parts = [shift.notes or ""]
        if shift.invoice_number:
            parts.append(f"Llegó Fact. {shift.invoice_number}")
        if shift.total_invoice_amount:
            parts.append(f"(Total {_money(shift.total_invoice_amount)}€)")
        combined = " ".join(part for part in parts if part)
        return combined or shift.payment_type.value


def _shift_detail(
    shift: TechnicianShift, key: str, member: Optional[StaffMember]
) -> str:
    if key == "role":
        return shift.role
    if key == "personName":
        return shift.person_name
    if key == "dni":
        return shift.dni
    if key == "schedule":
        return shift.schedule.value
    if key == "paymentType":
        return shift.payment_type.value
    if key == "notes":
        return shift.notes or ""
    if key == "agreedSalary":
        return _money(shift.agreed_salary)

    # Remaining columns come from the staff directory
    if member is None:
        return ""
    if key == "socialSecurityNumber":
        return member.social_security_number or ""
    if key == "phone":
        return member.phone or ""
    if key == "email":
        return member.email or ""
    if key == "bankAccount":
        return member.bank_account or ""
    if key == "province":
        return member.province or ""
    return ""


def event_crew_frame(
    event: ProductionEvent,
    staff: Iterable[StaffMember],
    columns: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Crew list of one event with the selected columns.

    Args:
        event: The event to export
        staff: Staff directory used for contact, bank and Social Security data
        columns: Keys of EXPORT_COLUMNS; defaults to role, name, DNI and schedule

    Returns:
        DataFrame with one row per shift, headed by the column labels

    Raises:
        ValueError: If a column key is unknown
    """
    keys = list(columns) if columns else list(DEFAULT_EXPORT_COLUMNS)
    unknown = [key for key in keys if key not in EXPORT_COLUMNS]
    if unknown:
        raise ValueError(f"Unknown export columns: {', '.join(unknown)}")

    lookup = _staff_by_dni(staff)
    rows = [
        [_shift_detail(shift, key, lookup.get(shift.dni)) for key in keys]
        for shift in event.shifts
    ]
    return pd.DataFrame(rows, columns=[EXPORT_COLUMNS[key] for key in keys])
