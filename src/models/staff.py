"""Staff master record model."""

from typing import Any, Optional

from pydantic import Field, field_validator

from src.models.base import BaseDataModel, coerce_optional_text, coerce_text
from src.models.event import PaymentType


class StaffMember(BaseDataModel):
    """A technician in the staff directory.

    Attributes:
        id: Unique record identifier (the DNI when seeded to the remote store)
        first_name: Given name
        last_name: Surnames
        dni: National ID
        social_security_number: Social Security affiliation number
        phone: Contact phone
        email: Contact email
        province: Home province
        bank_account: IBAN for payments
        role: Usual job title
        payment_type: Usual payment category
        notes: Free-text observations

    Example:
        >>> member = StaffMember(id="x", firstName="Ana", lastName="Ruiz", dni="1Z")
        >>> member.full_name
        'Ana Ruiz'
    """

    id: str = ""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    dni: str = ""
    social_security_number: Optional[str] = Field(
        default=None, alias="socialSecurityNumber"
    )
    phone: Optional[str] = None
    email: Optional[str] = None
    province: Optional[str] = None
    bank_account: Optional[str] = Field(default=None, alias="bankAccount")
    role: str = ""
    payment_type: PaymentType = Field(
        default=PaymentType.COOPERATIVA, alias="paymentType"
    )
    notes: Optional[str] = None

    @field_validator("id", "first_name", "last_name", "dni", "role", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return coerce_text(v)

    @field_validator(
        "social_security_number",
        "phone",
        "email",
        "province",
        "bank_account",
        "notes",
        mode="before",
    )
    @classmethod
    def optional_text(cls, v: Any) -> Optional[str]:
        return coerce_optional_text(v)

    @field_validator("payment_type", mode="before")
    @classmethod
    def lenient_payment_type(cls, v: Any) -> PaymentType:
        return PaymentType.parse(v)

    @property
    def full_name(self) -> str:
        """Display name used on crew shifts."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def sort_key(self) -> str:
        """Directory ordering key: surnames first, case-insensitive."""
        return f"{self.last_name} {self.first_name}".lower()
