"""Calculator modules for crew billing."""

from src.calculators.payment_rules import (
    PAYMENT_RULES,
    AmountSource,
    BillingFilter,
    PaymentRule,
    get_payment_rule,
    is_included_by_filter,
    is_invoice_missing,
    requires_invoice,
    resolve_shift_amount,
)
from src.calculators.stats_calculator import (
    EventCost,
    calculate_cost_per_event,
    calculate_role_distribution,
    classify_role,
    shift_cost,
)

__all__ = [
    # payment_rules
    "PAYMENT_RULES",
    "AmountSource",
    "BillingFilter",
    "PaymentRule",
    "get_payment_rule",
    "is_included_by_filter",
    "is_invoice_missing",
    "requires_invoice",
    "resolve_shift_amount",
    # stats_calculator
    "EventCost",
    "calculate_cost_per_event",
    "calculate_role_distribution",
    "classify_role",
    "shift_cost",
]
