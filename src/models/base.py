"""Base model for all records in the crew billing system.

This module provides a base Pydantic model with the shared configuration
and the lenient coercion helpers used by the event, staff and user records.
"""

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Stored documents come from a JSON file or a spreadsheet and may carry
    fields written by older versions of the dashboard, so unknown keys are
    ignored rather than rejected.

    Example:
        >>> class Crew(BaseDataModel):
        ...     name: str
        >>> Crew(name="Ana").model_dump()
        {'name': 'Ana'}
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        strict=False,
        # Legacy documents (e.g. defaultRole) must still load
        extra="ignore",
        populate_by_name=True,
        frozen=False,
    )

    def to_document(self) -> dict:
        """Serialize the model into a JSON-compatible document."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def generate_id() -> str:
    """Generate a short random identifier for new records."""
    return uuid.uuid4().hex[:9]


def coerce_text(value: Any) -> str:
    """Convert a possibly missing value into a stripped string.

    Args:
        value: Raw value from a stored document

    Returns:
        Empty string for None, otherwise ``str(value).strip()``
    """
    if value is None:
        return ""
    return str(value).strip()


def coerce_optional_text(value: Any) -> Optional[str]:
    """Like coerce_text, but blank values become None."""
    text = coerce_text(value)
    return text or None


def coerce_decimal(value: Any, default: Optional[Decimal] = Decimal("0")) -> Optional[Decimal]:
    """Convert a numeric-looking value into a Decimal.

    Blank, missing, non-finite and non-numeric values fall back to ``default``
    instead of raising.

    Args:
        value: Raw value (str, int, float, Decimal or None)
        default: Value to return when conversion is not possible

    Returns:
        The converted Decimal or ``default``

    Example:
        >>> coerce_decimal("302.5")
        Decimal('302.5')
        >>> coerce_decimal("abc")
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    text = str(value).strip().replace(",", ".")
    if not text:
        return default
    try:
        result = Decimal(text)
    except (InvalidOperation, ValueError):
        result = None
    if result is None or not result.is_finite():
        logger.debug(f"Could not read {value!r} as an amount; using {default}")
        return default
    return result
