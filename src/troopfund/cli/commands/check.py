"""Ledger consistency check command."""

import click
from troopfund.cli.account_resolution import principal_or_exit
from troopfund.domain.ledger import LedgerService


@click.command("check")
@click.pass_context
def check_command(ctx):
    """Verify balances and transfer pairs against transaction history.

    Exits with status 1 if any discrepancy is found.
    """
    principal_or_exit(ctx)
    problems = LedgerService(ctx.obj["db"]).verify()
    if not problems:
        click.echo("Ledger is consistent.")
        return
    for problem in problems:
        click.echo(f"Problem: {problem}", err=True)
    ctx.exit(1)


def register_commands(cli):
    """Register check command with main CLI."""
    cli.add_command(check_command)
