"""Database layer for relstore."""

from relstore.database.base import Database
from relstore.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
