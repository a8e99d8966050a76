"""Environment-driven settings for relstore."""

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_BOOK_LIMIT = 2


def get_database_url(database_path: Optional[str] = None) -> str:
    """Resolve the SQLAlchemy URL for the store.

    Args:
        database_path: Path to SQLite database file. If None, checks
            RELSTORE_DATABASE_URL, then RELSTORE_DB_PATH, then defaults to
            ~/.relstore/relstore.db

    Returns:
        SQLAlchemy database URL
    """
    if database_path is None:
        url = os.environ.get("RELSTORE_DATABASE_URL")
        if url:
            return url
        database_path = os.environ.get("RELSTORE_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".relstore"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "relstore.db")

    return f"sqlite:///{database_path}"


def get_book_limit() -> int:
    """Credit-limit threshold for Author.books (RELSTORE_BOOK_LIMIT, default 2)."""
    raw = os.environ.get("RELSTORE_BOOK_LIMIT")
    if raw is None or raw.strip() == "":
        return DEFAULT_BOOK_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"RELSTORE_BOOK_LIMIT must be an integer, got '{raw}'")
    if limit < 0:
        raise ValueError(f"RELSTORE_BOOK_LIMIT must not be negative, got {limit}")
    return limit


def get_log_level() -> int:
    """Logging level from RELSTORE_LOG_LEVEL (default WARNING)."""
    name = os.environ.get("RELSTORE_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
