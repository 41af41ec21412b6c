"""Production statistics: cost per event and crew per role family."""

import unicodedata
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from src.models.event import ProductionEvent, TechnicianShift

TITLE_DISPLAY_LENGTH = 15

# Checked in order; the first fragment found in the role wins
ROLE_FAMILIES: List[Tuple[Tuple[str, ...], str]] = [
    (("camara",), "Cámara"),
    (("tecnico", "jefe"), "Técnico"),
    (("realizador",), "Realización"),
    (("auxiliar", "asistente"), "Auxiliar"),
    (("produccion",), "Producción"),
]
OTHER_ROLE_FAMILY = "Otros"


@dataclass
class EventCost:
    """Crew cost of one event.

    Attributes:
        name: Short uppercased title for charts and tables
        full_title: Complete event title
        cost: Sum of shift costs
    """

    name: str
    full_title: str
    cost: Decimal


def shift_cost(shift: TechnicianShift) -> Decimal:
    """Cost of a shift for statistics.

    The invoice total is used when it is set and non-zero, otherwise the
    agreed salary. The billing payment rules are not applied.
    """
    return shift.total_invoice_amount or shift.agreed_salary or Decimal("0")


def _display_title(title: str) -> str:
    if len(title) > TITLE_DISPLAY_LENGTH:
        title = title[:TITLE_DISPLAY_LENGTH] + "..."
    return title.upper()


def calculate_cost_per_event(events: Iterable[ProductionEvent]) -> List[EventCost]:
    """Calculate the crew cost of every event.

    Args:
        events: Production events

    Returns:
        One EventCost per event, in input order

    Example:
        >>> costs = calculate_cost_per_event([event])
        >>> costs[0].name
        'GALA DE PREMIOS...'
    """
    return [
        EventCost(
            name=_display_title(event.title),
            full_title=event.title,
            cost=sum((shift_cost(s) for s in event.shifts), Decimal("0")),
        )
        for event in events
    ]


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def classify_role(role: str) -> str:
    """Map a free-text role to its role family.

    Example:
        >>> classify_role("Operador de camara")
        'Cámara'
        >>> classify_role("Jefe Técnico")
        'Técnico'
        >>> classify_role("Producción")
        'Producción'
    """
    normalized = _fold_accents(role.lower())
    for fragments, family in ROLE_FAMILIES:
        if any(fragment in normalized for fragment in fragments):
            return family
    return OTHER_ROLE_FAMILY


def calculate_role_distribution(events: Iterable[ProductionEvent]) -> Dict[str, int]:
    """Count shifts per role family across events.

    Args:
        events: Production events

    Returns:
        Mapping of role family to shift count, in order of first appearance
    """
    counts: Dict[str, int] = {}
    for event in events:
        for shift in event.shifts:
            family = classify_role(shift.role)
            counts[family] = counts.get(family, 0) + 1
    return counts
