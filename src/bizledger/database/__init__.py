"""Database layer for bizledger application."""

from bizledger.database.base import Database
from bizledger.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
