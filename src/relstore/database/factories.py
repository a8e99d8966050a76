"""Database factory functions for creating database instances."""

from typing import Optional

from relstore.config import get_database_url
from relstore.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            RELSTORE_DATABASE_URL and RELSTORE_DB_PATH environment variables,
            then defaults to ~/.relstore/relstore.db

    Returns:
        SQLAlchemyDatabase instance
    """
    return SQLAlchemyDatabase(get_database_url(database_path))
