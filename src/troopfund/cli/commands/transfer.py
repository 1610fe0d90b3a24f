"""Transfer command."""

import click
from troopfund.cli.account_resolution import principal_or_exit, resolve_account_or_exit
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.errors import DomainError
from troopfund.domain.ledger import LedgerService, UNIT_ACCOUNT_REF
from troopfund.utils.date_parser import parse_date
from troopfund.utils.amount_parser import parse_amount


@click.command("transfer")
@click.option(
    "--from", "from_account", default=UNIT_ACCOUNT_REF, show_default=True,
    help="Source account name, ID, or 'unit'",
)
@click.option("--to", "to_account", required=True, help="Destination account name, ID, or 'unit'")
@click.option("--amount", required=True, help="Amount to move (positive)")
@click.option("--description", help="Description for both sides (defaults to 'Transfer')")
@click.option("--date", default="today", show_default=True, help="Transfer date")
@click.pass_context
def transfer_command(
    ctx,
    from_account: str,
    to_account: str,
    amount: str,
    description: str | None,
    date: str,
):
    """Move funds between two accounts.

    Records a payment on the source account and a matching deposit on the
    destination account.

    Examples:
        troopfund transfer --to Alex --amount 10 --description "Reimbursement"
        troopfund transfer --from Alex --to Jordan --amount 5
    """
    principal = principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])
    source = resolve_account_or_exit(ctx, ledger, from_account)
    destination = resolve_account_or_exit(ctx, ledger, to_account)

    try:
        debit, credit = ledger.transfer(
            principal,
            source,
            destination,
            amount=parse_amount(amount),
            description=description,
            date=parse_date(date),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    from_obj = ledger.get_account(debit.account_id)
    to_obj = ledger.get_account(credit.account_id)
    click.echo(f"Transferred ${credit.amount:,.2f} from '{from_obj.name}' to '{to_obj.name}'")
    click.echo(f"  Transactions: {debit.id}, {credit.id}")


def register_commands(cli):
    """Register transfer command with main CLI."""
    cli.add_command(transfer_command)
