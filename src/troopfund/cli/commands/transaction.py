"""Transaction management commands."""

import click
from troopfund.cli.account_resolution import principal_or_exit, resolve_account_or_exit
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.category import CATEGORIES
from troopfund.domain.errors import DomainError, NotFoundError, transaction_not_found
from troopfund.domain.ledger import LedgerService
from troopfund.utils.date_parser import parse_date
from troopfund.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name, ID, or 'unit'")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--amount",
    required=True,
    help="Amount; positive for deposits, negative for payments (e.g., 25.00 or -12.50)",
)
@click.option("--category", required=True, help=f"One of: {', '.join(CATEGORIES)}")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.pass_context
def add_transaction(ctx, account: str, description: str, amount: str, category: str, date: str):
    """Post a deposit or payment to an account.

    Examples:
        troopfund transaction add --account Alex --description "Dues" --amount 25 --category Dues
        troopfund transaction add --account unit --description "Tents" --amount -300 --category Equipment
    """
    principal = principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])
    account_ref = resolve_account_or_exit(ctx, ledger, account)

    try:
        txn = ledger.post_transaction(
            principal,
            account_ref,
            description=description,
            amount=parse_amount(amount),
            category=category,
            date=parse_date(date),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    account_obj = ledger.get_account(txn.account_id)
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    click.echo(f"  Balance: ${account_obj.balance:,.2f}")


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--description", help="New description")
@click.option("--amount", help="New amount")
@click.option("--category", help="New category")
@click.option("--date", help="New date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    description: str | None,
    amount: str | None,
    category: str | None,
    date: str | None,
) -> None:
    """Edit a transaction.

    Only the fields that are provided change. A transfer keeps its amount and
    category; a new description or date is applied to both of its sides.

    Examples:
        troopfund transaction edit 4 --amount 40.00
        troopfund transaction edit 7 --description "Camp reimbursement"
    """
    principal = principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])

    try:
        existing = ledger.get_transaction(transaction_id)
        if existing is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        txn = ledger.edit_transaction(
            principal,
            transaction_id,
            description=description if description is not None else existing.description,
            amount=parse_amount(amount) if amount is not None else existing.amount,
            category=category if category is not None else existing.category,
            date=parse_date(date) if date is not None else existing.date,
        )
        click.echo(f"Updated transaction {txn.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Deleting either side of a transfer deletes the whole transfer.

    Examples:
        troopfund transaction delete 4
        troopfund transaction delete 4 --yes
    """
    principal = principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])

    txn = ledger.get_transaction(transaction_id)
    if txn is None:
        handle_domain_error(ctx, NotFoundError(transaction_not_found(transaction_id)))

    what = "this transfer (both sides)" if txn.is_transfer else f"transaction {transaction_id}"
    if not yes and not click.confirm(f"Are you sure you want to delete {what}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete_transaction(principal, transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--account", required=True, help="Account name, ID, or 'unit'")
@click.pass_context
def list_transactions(ctx, account: str) -> None:
    """List an account's transactions, newest first."""
    principal_or_exit(ctx)
    ledger = LedgerService(ctx.obj["db"])
    account_ref = resolve_account_or_exit(ctx, ledger, account)

    try:
        account_id = ledger.resolve_account_ref(account_ref)
        transactions = ledger.list_transactions(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':>5} {'Date':10} {'Category':14} {'Amount':>12}  Description")
    click.echo("-" * 70)
    for txn in transactions:
        click.echo(
            f"{txn.id:>5} {txn.date.isoformat():10} {txn.category:14} "
            f"{txn.amount:>12,.2f}  {txn.description}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
