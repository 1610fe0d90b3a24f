"""Database layer for troopfund application."""

from troopfund.database.base import Database
from troopfund.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
