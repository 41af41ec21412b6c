"""Staff directory commands."""

from typing import Optional

import click

from src.cli.error_handlers import with_error_handling
from src.cli.utils.formatters import format_info, format_success, format_table
from src.cli.utils.session import get_repository, is_debug
from src.models import StaffMember
from src.services.staff_service import StaffDirectory


@click.command(name="list-staff")
@click.option("--search", default=None, help="Name, DNI, role or province contains")
def list_staff(search: Optional[str]):
    """List the staff directory, sorted by surname.

    Example:
        crew-billing list-staff --search sevilla
    """
    with with_error_handling(is_debug()):
        members = StaffDirectory(get_repository()).search(search)
        if not members:
            click.echo(format_info("No staff match the search."))
            return

        rows = [
            [
                f"{m.last_name}, {m.first_name}" if m.last_name else m.first_name,
                m.dni,
                m.role,
                m.payment_type.value,
                m.province or "",
                m.phone or "",
            ]
            for m in members
        ]
        click.echo(format_table(["Nombre", "DNI", "Puesto", "Tipo", "Provincia", "Teléfono"], rows))
        click.echo()
        click.echo(format_success(f"{len(members)} staff member(s)"))


@click.command(name="add-staff")
@click.option("--first-name", required=True)
@click.option("--last-name", default="")
@click.option("--dni", required=True)
@click.option("--role", default="")
@click.option("--payment-type", default="Cooperativa", show_default=True)
@click.option("--ss-number", default=None, help="Social Security affiliation number")
@click.option("--phone", default=None)
@click.option("--email", default=None)
@click.option("--province", default=None)
@click.option("--bank-account", default=None, help="IBAN")
def add_staff(
    first_name: str,
    last_name: str,
    dni: str,
    role: str,
    payment_type: str,
    ss_number: Optional[str],
    phone: Optional[str],
    email: Optional[str],
    province: Optional[str],
    bank_account: Optional[str],
):
    """Add a technician to the staff directory."""
    with with_error_handling(is_debug()):
        member = StaffMember(
            first_name=first_name,
            last_name=last_name,
            dni=dni,
            role=role,
            payment_type=payment_type,
            social_security_number=ss_number,
            phone=phone,
            email=email,
            province=province,
            bank_account=bank_account,
        )
        saved = StaffDirectory(get_repository()).save(member)
        click.echo(format_success(f"Saved {saved.full_name} ({saved.id})"))
