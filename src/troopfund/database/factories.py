"""Build database handles from a file path or the environment."""

import os
from pathlib import Path
from typing import Optional

from troopfund.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "TROOPFUND_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".troopfund"


def default_database_path() -> str:
    """Return ``~/.troopfund/troopfund.db``, creating the directory on demand."""
    DEFAULT_DB_DIR.mkdir(parents=True, exist_ok=True)
    return str(DEFAULT_DB_DIR / "troopfund.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the SQLite ledger at ``database_path``.

    Without a path, ``TROOPFUND_DB_PATH`` is used, and failing that the file in
    the user's home directory. The schema is created if the file is new.
    """
    path = database_path or os.environ.get(DB_PATH_ENV) or default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{path}")
