"""Database layer for expense_tracker application."""

from expense_tracker.database.base import Database, StorageTransaction
from expense_tracker.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "StorageTransaction", "create_database", "create_sqlite_database"]
