"""Production statistics command."""

import click

from src.calculators.stats_calculator import (
    calculate_cost_per_event,
    calculate_role_distribution,
)
from src.cli.error_handlers import with_error_handling
from src.cli.utils.formatters import format_currency, format_info, format_table
from src.cli.utils.session import get_repository, is_debug


@click.command(name="stats")
def stats():
    """Show crew cost per event and crew size per role family."""
    with with_error_handling(is_debug()):
        events = get_repository().list_events()
        if not events:
            click.echo(format_info("No events stored."))
            return

        costs = calculate_cost_per_event(events)
        click.echo("Coste por evento")
        click.echo(
            format_table(
                ["Evento", "Coste"],
                [[cost.name, format_currency(cost.cost)] for cost in costs],
            )
        )

        distribution = calculate_role_distribution(events)
        total_shifts = sum(distribution.values())
        click.echo()
        click.echo("Distribución por puesto")
        click.echo(
            format_table(
                ["Puesto", "Turnos", "%"],
                [
                    [family, count, f"{100 * count / total_shifts:.0f}%"]
                    for family, count in distribution.items()
                ]
                if total_shifts
                else [],
            )
        )
