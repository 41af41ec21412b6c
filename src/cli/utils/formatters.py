"""Output formatting utilities for CLI."""

from decimal import Decimal
from typing import List, Sequence

import click


def format_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    return click.style(f"ℹ {message}", fg="blue")


def format_currency(amount: Decimal) -> str:
    """Format an amount in euros with two decimals.

    Example:
        >>> format_currency(Decimal("302.5"))
        '302.50 €'
    """
    return f"{amount:.2f} €"


def format_table(headers: Sequence[str], rows: List[Sequence], max_width: int = 40) -> str:
    """Format rows as a plain-text table.

    Args:
        headers: Column headers
        rows: Data rows; cells are converted with ``str``
        max_width: Cells longer than this are truncated

    Returns:
        The table, or an empty string when there are no headers
    """
    if not headers:
        return ""

    cells = [
        [str(cell) for cell in row[: len(headers)]] + [""] * (len(headers) - len(row))
        for row in rows
    ]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    widths = [min(w, max_width) for w in widths]

    def render(values: Sequence[str]) -> str:
        padded = [f" {value[:widths[i]]:<{widths[i]}} " for i, value in enumerate(values)]
        return "|" + "|".join(padded) + "|"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [separator, render(list(headers)), separator]
    if cells:
        lines.extend(render(row) for row in cells)
        lines.append(separator)
    return "\n".join(lines)
