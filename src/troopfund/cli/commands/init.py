"""Initialize command."""

import click
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.errors import DomainError
from troopfund.domain.ledger import LedgerService
from troopfund.domain.user import UserService


@click.command("init")
@click.option("--admin", help="Create the first admin user with this username")
@click.pass_context
def init_command(ctx, admin: str | None):
    """Initialize the ledger.

    Creates the schema and the unit account. With --admin, also creates the
    first admin user; this only works while no users exist.

    Examples:
        troopfund init --admin alice
    """
    db = ctx.obj["db"]
    unit = LedgerService(db).ensure_unit_account()
    click.echo(f"Unit account ready (ID: {unit.id})")

    if admin is not None:
        try:
            user = UserService(db).bootstrap_admin(admin)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Created admin user '{user.username}' (ID: {user.id})")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init_command)
