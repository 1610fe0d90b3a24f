"""troopfund - ledger of scout accounts inside a shared unit fund."""

__version__ = "0.1.0"


def __getattr__(name):
    # The CLI imports click and SQLAlchemy; only load it when asked for
    if name == "main":
        from troopfund.cli.main import main as cli_main

        return cli_main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
