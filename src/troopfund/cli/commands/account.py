"""Account management commands."""

import click
from troopfund.cli.account_resolution import principal_or_exit, resolve_account_or_exit
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.errors import DomainError
from troopfund.domain.ledger import LedgerService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.pass_context
def create_account(ctx, name: str):
    """Create a new scout account.

    Examples:
        troopfund account create "Alex"
    """
    principal = principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])

    try:
        account = ledger.create_account(principal, name)
        click.echo(f"Created account '{account.name}' (ID: {account.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])

    accounts = ledger.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        marker = " (unit)" if acc.is_unit_account else ""
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | ${acc.balance:>12,.2f}{marker}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename a scout account.

    ACCOUNT can be an account name or ID. The unit account cannot be renamed.

    Examples:
        troopfund account rename "Alex" "Alex P."
        troopfund account rename 2 "Jordan"
    """
    principal = principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])
    account_ref = resolve_account_or_exit(ctx, ledger, account)

    try:
        if not isinstance(account_ref, int):
            account_ref = ledger.resolve_account_ref(account_ref)
        renamed = ledger.rename_account(principal, account_ref, new_name)
        click.echo(f"Renamed account to '{renamed.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
