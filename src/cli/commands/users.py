"""User account commands."""

import click

from src.cli.error_handlers import AuthenticationError, with_error_handling
from src.cli.utils.formatters import format_success, format_table
from src.cli.utils.session import get_repository, is_debug
from src.models import AppUser, UserRole
from src.services.user_service import UserService


def _require_login(service: UserService, username: str, password: str) -> AppUser:
    user = service.authenticate(username, password)
    if user is None:
        raise AuthenticationError("Invalid username or password")
    return user


@click.command(name="login")
@click.option("--username", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
def login(username: str, password: str):
    """Check a username and password."""
    with with_error_handling(is_debug()):
        user = _require_login(UserService(get_repository()), username, password)
        click.echo(format_success(f"Welcome, {user.name} ({user.role.value})"))


@click.command(name="list-users")
def list_users():
    """List application accounts."""
    with with_error_handling(is_debug()):
        users = UserService(get_repository()).list_users()
        click.echo(
            format_table(
                ["ID", "Usuario", "Nombre", "Rol"],
                [[u.id, u.username, u.name, u.role.value] for u in users],
            )
        )


@click.command(name="add-user")
@click.option("--username", required=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--name", required=True, help="Display name")
@click.option(
    "--role",
    type=click.Choice([role.value for role in UserRole], case_sensitive=False),
    default=UserRole.COORDINATOR.value,
    show_default=True,
)
def add_user(username: str, password: str, name: str, role: str):
    """Create an application account.

    Example:
        crew-billing add-user --username marta --name "Marta López" --role COORDINATOR
    """
    with with_error_handling(is_debug()):
        user = UserService(get_repository()).add_user(username, password, name, role.upper())
        click.echo(format_success(f"Created user {user.username} ({user.id})"))


@click.command(name="delete-user")
@click.argument("user_id")
@click.option("--as-user", "acting_username", required=True, help="Your username")
@click.option("--as-password", "acting_password", prompt=True, hide_input=True)
def delete_user(user_id: str, acting_username: str, acting_password: str):
    """Delete an application account. You cannot delete yourself."""
    with with_error_handling(is_debug()):
        service = UserService(get_repository())
        acting_user = _require_login(service, acting_username, acting_password)
        if service.delete_user(user_id, acting_user):
            click.echo(format_success(f"Deleted user {user_id}"))
        else:
            click.echo(f"No user with id {user_id}")
