"""User management commands."""

import click
from troopfund.cli.account_resolution import principal_or_exit
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.authorization import Role
from troopfund.domain.errors import DomainError
from troopfund.domain.user import UserService


@click.group()
def user_group():
    """Manage users (admin only)."""
    pass


@user_group.command("create")
@click.argument("username")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.VIEWER.value,
    show_default=True,
    help="Role for the new user",
)
@click.pass_context
def create_user(ctx, username: str, role: str):
    """Create a user.

    Examples:
        troopfund --user alice user create bob --role editor
    """
    principal = principal_or_exit(ctx)
    service = UserService(ctx.obj["db"])

    try:
        user = service.create_user(principal, username, role)
        click.echo(f"Created user '{user.username}' with role {user.role} (ID: {user.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List users."""
    principal = principal_or_exit(ctx)
    service = UserService(ctx.obj["db"])

    try:
        users = service.list_users(principal)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nUsers:")
    click.echo("-" * 40)
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.username:20s} | {u.role}")


@user_group.command("delete")
@click.argument("user_id", type=int)
@click.pass_context
def delete_user(ctx, user_id: int):
    """Delete a user by ID."""
    principal = principal_or_exit(ctx)
    service = UserService(ctx.obj["db"])

    try:
        service.delete_user(principal, user_id)
        click.echo(f"Deleted user {user_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
