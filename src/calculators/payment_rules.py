"""Payment rule table for resolving shift amounts.

Every payment category maps to one PaymentRule that decides:
- where the payable amount of a shift comes from when finance has not
  entered an override (zero or the agreed salary)
- whether the category is invoiced, so a missing invoice number is flagged
- whether the category is shown when billing is restricted to invoices

The table is the single source of truth for these finance rules; the
aggregator and the reports only call the functions in this module.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict

from src.models.event import PaymentType, TechnicianShift


class AmountSource(Enum):
    """Where a shift's amount comes from when no override is set."""

    ZERO = "zero"
    AGREED_SALARY = "agreed_salary"


class BillingFilter(str, Enum):
    """Payment-category filter for the billing view."""

    ALL = "ALL"
    INVOICE_ONLY = "INVOICE_ONLY"


@dataclass(frozen=True)
class PaymentRule:
    """Finance rule for one payment category.

    Attributes:
        amount_source: Default amount when no override is set
        requires_invoice: Whether shifts of this category carry an invoice
        invoice_relevant: Whether the category is kept by INVOICE_ONLY
    """

    amount_source: AmountSource
    requires_invoice: bool
    invoice_relevant: bool


# Invoiced categories start at zero until finance enters the invoice total
PAYMENT_RULES: Dict[PaymentType, PaymentRule] = {
    PaymentType.COOPERATIVA: PaymentRule(AmountSource.ZERO, True, True),
    PaymentType.FACTURA: PaymentRule(AmountSource.ZERO, True, True),
    PaymentType.AUTONOMO: PaymentRule(AmountSource.ZERO, True, True),
    PaymentType.EMPRESA: PaymentRule(AmountSource.ZERO, True, True),
    PaymentType.PLANTILLA: PaymentRule(AmountSource.ZERO, False, False),
    PaymentType.ALTA_SEG_SOCIAL: PaymentRule(AmountSource.AGREED_SALARY, False, False),
    PaymentType.UNKNOWN: PaymentRule(AmountSource.AGREED_SALARY, False, True),
}

_FALLBACK_RULE = PAYMENT_RULES[PaymentType.UNKNOWN]


def get_payment_rule(payment_type: PaymentType) -> PaymentRule:
    """Look up the rule for a payment category.

    Args:
        payment_type: The shift's payment category

    Returns:
        The matching PaymentRule (the Unknown rule for anything unlisted)
    """
    return PAYMENT_RULES.get(payment_type, _FALLBACK_RULE)


def resolve_shift_amount(shift: TechnicianShift) -> Decimal:
    """Resolve the payable amount of a shift.

    Resolution order:
    1. An explicit ``total_invoice_amount`` is used verbatim, whatever the
       payment type. It is a manual entry and is never recomputed.
    2. Otherwise the category's rule decides: zero for invoiced categories
       and Plantilla, the agreed salary for Alta Seg. Social and unknown
       categories.

    Args:
        shift: The shift to resolve

    Returns:
        Payable amount as a Decimal

    Example:
        >>> shift = TechnicianShift(paymentType="Autonomo", agreedSalary=250)
        >>> resolve_shift_amount(shift)
        Decimal('0')
        >>> shift = TechnicianShift(paymentType="Alta Seg. Social", agreedSalary=300)
        >>> resolve_shift_amount(shift)
        Decimal('300')
    """
    if shift.total_invoice_amount is not None:
        return shift.total_invoice_amount

    rule = get_payment_rule(shift.payment_type)
    if rule.amount_source == AmountSource.ZERO:
        return Decimal("0")
    return shift.agreed_salary or Decimal("0")


def requires_invoice(payment_type: PaymentType) -> bool:
    """Whether shifts of this category are expected to carry an invoice."""
    return get_payment_rule(payment_type).requires_invoice


def is_invoice_missing(shift: TechnicianShift) -> bool:
    """Check whether an invoiced shift still lacks its invoice number.

    Alta Seg. Social and Plantilla shifts never carry invoices and are never
    flagged.

    Args:
        shift: The shift to check

    Returns:
        True if the category requires an invoice and none is recorded
    """
    return requires_invoice(shift.payment_type) and not shift.invoice_number


def is_included_by_filter(payment_type: PaymentType, billing_filter: BillingFilter) -> bool:
    """Check whether a payment category survives the billing filter.

    Args:
        payment_type: The shift's payment category
        billing_filter: ALL keeps everything; INVOICE_ONLY drops payroll
            categories (Alta Seg. Social and Plantilla)

    Returns:
        True if shifts of this category are shown
    """
    if BillingFilter(billing_filter) == BillingFilter.ALL:
        return True
    return get_payment_rule(payment_type).invoice_relevant
