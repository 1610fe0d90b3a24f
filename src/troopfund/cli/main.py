"""Main CLI entry point."""

import click
from troopfund import __version__
from troopfund.database.factories import create_sqlite_database
from troopfund.domain.ledger import LedgerService
from troopfund.logging_config import configure_logging

from troopfund.cli.commands import account, audit, check, init, transaction, transfer, user

COMMAND_MODULES = (init, account, transaction, transfer, user, audit, check)


@click.group()
@click.version_option(__version__, prog_name="troopfund")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TROOPFUND_DB_PATH environment variable)",
    envvar="TROOPFUND_DB_PATH",
)
@click.option(
    "--user",
    "username",
    help="Username to act as (overrides TROOPFUND_USER environment variable)",
    envvar="TROOPFUND_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="TROOPFUND_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, username: str | None, log_level: str):
    """Troopfund - scout account ledger.

    Track each scout's share of the unit's funds: deposits, payments and
    transfers between scout accounts and the unit account.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # No database for --help or a bare group invocation
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        LedgerService(db).ensure_unit_account()
        ctx.obj["db"] = db
        ctx.obj["username"] = username
        ctx.call_on_close(db.disconnect)


for module in COMMAND_MODULES:
    module.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
