"""Production event and crew shift models.

A production event owns an ordered list of technician shifts. Shifts carry
the compensation data that the billing aggregator resolves into payable
amounts.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field, field_serializer, field_validator

from src.models.base import (
    BaseDataModel,
    coerce_decimal,
    coerce_optional_text,
    coerce_text,
)


class PaymentType(str, Enum):
    """How a technician is paid for a shift.

    The values are the strings stored in event documents.
    """

    COOPERATIVA = "Cooperativa"
    FACTURA = "Factura"
    ALTA_SEG_SOCIAL = "Alta Seg. Social"
    PLANTILLA = "Plantilla"
    EMPRESA = "Empresa"
    AUTONOMO = "Autonomo"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "PaymentType":
        """Parse a stored value, mapping anything unrecognized to UNKNOWN.

        Example:
            >>> PaymentType.parse("Autonomo")
            <PaymentType.AUTONOMO: 'Autonomo'>
            >>> PaymentType.parse("Freelance")
            <PaymentType.UNKNOWN: 'Unknown'>
        """
        if isinstance(value, cls):
            return value
        text = coerce_text(value)
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        return cls.UNKNOWN


class Schedule(str, Enum):
    """Shift length."""

    FULL = "Completa"
    HALF = "Media"


class TechnicianShift(BaseDataModel):
    """A technician assigned to one production event.

    Attributes:
        id: Unique shift identifier
        event_id: Identifier of the owning event
        role: Free-text job title (e.g. "Operador de Cámara")
        person_name: Technician display name
        dni: National ID, used as the billing aggregation key
        agreed_salary: Base amount agreed for the shift
        payment_type: Payment category
        schedule: Full or half day
        notes: Free-text observations
        invoice_number: Invoice reference, filled in by finance
        total_invoice_amount: Manual amount override, filled in by finance
        social_security_start_date: Start of the Social Security window
        social_security_end_date: End of the Social Security window

    Missing or malformed fields degrade to empty strings and zero.

    Example:
        >>> shift = TechnicianShift(
        ...     id="s1",
        ...     person_name="Ana Ruiz",
        ...     dni="12345678Z",
        ...     agreedSalary="250",
        ...     paymentType="Autonomo",
        ... )
        >>> shift.agreed_salary
        Decimal('250')
    """

    id: str = ""
    event_id: str = Field(default="", alias="eventId")
    role: str = ""
    person_name: str = Field(default="", alias="personName")
    dni: str = ""
    agreed_salary: Decimal = Field(default=Decimal("0"), alias="agreedSalary")
    payment_type: PaymentType = Field(
        default=PaymentType.UNKNOWN, alias="paymentType"
    )
    schedule: Schedule = Schedule.FULL
    notes: Optional[str] = None
    invoice_number: Optional[str] = Field(default=None, alias="invoiceNumber")
    total_invoice_amount: Optional[Decimal] = Field(
        default=None, alias="totalInvoiceAmount"
    )
    social_security_start_date: Optional[str] = Field(
        default=None, alias="socialSecurityStartDate"
    )
    social_security_end_date: Optional[str] = Field(
        default=None, alias="socialSecurityEndDate"
    )

    @field_validator("id", "event_id", "role", "person_name", "dni", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        """Missing strings become empty strings."""
        return coerce_text(v)

    @field_validator(
        "notes",
        "invoice_number",
        "social_security_start_date",
        "social_security_end_date",
        mode="before",
    )
    @classmethod
    def optional_text(cls, v: Any) -> Optional[str]:
        """Blank optional strings are stored as unset."""
        return coerce_optional_text(v)

    @field_validator("agreed_salary", mode="before")
    @classmethod
    def lenient_salary(cls, v: Any) -> Decimal:
        """Missing or malformed salaries are treated as zero."""
        return coerce_decimal(v)

    @field_validator("total_invoice_amount", mode="before")
    @classmethod
    def lenient_override(cls, v: Any) -> Optional[Decimal]:
        """Blank or malformed overrides are treated as not set."""
        return coerce_decimal(v, default=None)

    @field_validator("payment_type", mode="before")
    @classmethod
    def lenient_payment_type(cls, v: Any) -> PaymentType:
        return PaymentType.parse(v)

    @field_validator("schedule", mode="before")
    @classmethod
    def lenient_schedule(cls, v: Any) -> Schedule:
        if isinstance(v, Schedule):
            return v
        text = coerce_text(v)
        if text.lower() in ("media", "half"):
            return Schedule.HALF
        return Schedule.FULL

    @field_serializer("agreed_salary", "total_invoice_amount", when_used="json")
    def serialize_amount(self, value: Optional[Decimal]) -> Optional[float]:
        # Stored documents keep amounts as plain numbers
        return float(value) if value is not None else None

    @property
    def social_security(self) -> bool:
        """Whether the technician is registered with Social Security."""
        return self.payment_type == PaymentType.ALTA_SEG_SOCIAL

    def to_document(self) -> dict:
        document = super().to_document()
        document["socialSecurity"] = self.social_security
        return document


class ProductionEvent(BaseDataModel):
    """A production event and its crew.

    Attributes:
        id: Unique event identifier
        title: Event title
        date: ISO date string (YYYY-MM-DD)
        shifts: Crew assignments, in display order

    The ``shift.event_id == event.id`` invariant is applied by
    ``with_stamped_shifts`` whenever an event is saved.

    Example:
        >>> event = ProductionEvent(id="e1", title="Gala", date=dt.date(2024, 3, 15))
        >>> event.date
        '2024-03-15'
    """

    id: str = ""
    title: str = ""
    date: str = ""
    shifts: List[TechnicianShift] = Field(default_factory=list)

    @field_validator("id", "title", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return coerce_text(v)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> str:
        """Accept ``datetime.date`` values and ISO strings.

        ISO datetimes are cut down to their date part so that string
        comparison against date bounds keeps working.
        """
        if isinstance(v, dt.datetime):
            return v.date().isoformat()
        if isinstance(v, dt.date):
            return v.isoformat()
        text = coerce_text(v)
        return text[:10] if "T" in text else text

    @field_validator("shifts", mode="before")
    @classmethod
    def default_shifts(cls, v: Any) -> Any:
        return v or []

    def with_stamped_shifts(self) -> "ProductionEvent":
        """Return a copy whose shifts all reference this event."""
        shifts = [
            shift.model_copy(update={"event_id": self.id}) for shift in self.shifts
        ]
        return self.model_copy(update={"shifts": shifts})

    def find_shift(self, shift_id: str) -> Optional[TechnicianShift]:
        """Return the shift with the given id, or None."""
        for shift in self.shifts:
            if shift.id == shift_id:
                return shift
        return None

    def to_document(self) -> dict:
        document = super().to_document()
        document["shifts"] = [shift.to_document() for shift in self.shifts]
        return document
