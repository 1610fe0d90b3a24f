"""CLI helpers for account and principal resolution."""

from __future__ import annotations

import click
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.authorization import Principal
from troopfund.domain.errors import DomainError
from troopfund.domain.ledger import LedgerService, AccountRef
from troopfund.domain.user import UserService
from troopfund.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, ledger: LedgerService, account: str | int
) -> AccountRef:
    """Resolve account name, ID or ``unit``, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(ledger, account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def principal_or_exit(ctx: click.Context) -> Principal:
    """Resolve the acting user given by --user / TROOPFUND_USER, or exit."""
    username = ctx.obj.get("username")
    if not username:
        click.echo("Error: No acting user; pass --user or set TROOPFUND_USER", err=True)
        ctx.exit(1)
    try:
        return UserService(ctx.obj["db"]).principal_for(username)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
