"""Shared pytest fixtures for expense_tracker tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from expense_tracker.config import get_settings
from expense_tracker.database.factories import create_sqlite_database
from expense_tracker.domain.account import AccountService
from expense_tracker.domain.category import CategoryService
from expense_tracker.domain.ledger import LedgerService
from expense_tracker.domain.pattern import PatternMatcher, PatternService

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings from reading the real home directory or a stale cache."""
    for var in (
        "EXPENSE_TRACKER_DATABASE_URL",
        "EXPENSE_TRACKER_ENVIRONMENT",
        "EXPENSE_TRACKER_USER_ID",
        "EXPENSE_TRACKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("EXPENSE_TRACKER_DB_PATH", str(tmp_path / "settings.db"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def ledger(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def pattern_service(temp_db):
    """Create a PatternService with a temporary database."""
    return PatternService(temp_db)


@pytest.fixture
def matcher(temp_db):
    """Create a PatternMatcher with a temporary database."""
    return PatternMatcher(temp_db)


@pytest.fixture
def default_categories(category_service):
    """Seed default categories and return them keyed by name."""
    category_service.ensure_default_categories()
    return {cat.name: cat for cat in category_service.list_categories(USER_ID) if cat.is_default}


@pytest.fixture
def food_category(default_categories):
    """The default 'Food & Dining' category."""
    return default_categories["Food & Dining"]


@pytest.fixture
def sample_account(account_service):
    """Create a sample account with a 1000.00 opening balance."""
    return account_service.create_account(USER_ID, name="Checking", initial_balance=Decimal("1000.00"))


@pytest.fixture
def other_user_account(account_service):
    """Create an account owned by a different user."""
    return account_service.create_account(OTHER_USER_ID, name="Other Checking", initial_balance=Decimal("500.00"))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
