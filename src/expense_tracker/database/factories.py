"""Database factory functions for creating database instances."""

from typing import Optional

from expense_tracker.config import resolve_database_url
from expense_tracker.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            EXPENSE_TRACKER_DATABASE_URL and EXPENSE_TRACKER_DB_PATH environment
            variables, then defaults to ~/.expense_tracker/expenses.db

    Returns:
        SQLAlchemyDatabase instance
    """
    return SQLAlchemyDatabase(resolve_database_url(database_path))


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL."""
    return SQLAlchemyDatabase(database_url)
