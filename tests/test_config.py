"""Tests for settings loaded from the environment."""

import logging

import pytest

from expense_tracker.config import Environment, Settings, reload_settings, resolve_database_url


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.delenv("EXPENSE_TRACKER_DB_PATH")
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = Settings.from_environment()

    assert settings.environment == Environment.DEVELOPMENT
    assert settings.user_id == 1
    assert settings.log_level == "WARNING"
    assert settings.database_url.endswith("expenses.db")


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("EXPENSE_TRACKER_ENVIRONMENT", "Production")
    monkeypatch.setenv("EXPENSE_TRACKER_USER_ID", "42")
    monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "debug")
    monkeypatch.setenv("EXPENSE_TRACKER_DB_PATH", str(tmp_path / "x.db"))

    settings = reload_settings()

    assert settings.environment == Environment.PRODUCTION
    assert settings.user_id == 42
    assert settings.log_level == "DEBUG"
    assert settings.database_url == f"sqlite:///{tmp_path / 'x.db'}"


@pytest.mark.parametrize(
    "var,value",
    [
        ("EXPENSE_TRACKER_ENVIRONMENT", "staging"),
        ("EXPENSE_TRACKER_USER_ID", "abc"),
        ("EXPENSE_TRACKER_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)

    with pytest.raises(ValueError, match=var):
        Settings.from_environment()


def test_database_url_precedence(monkeypatch, tmp_path):
    """An explicit path beats the URL variable, which beats the path variable."""
    monkeypatch.setenv("EXPENSE_TRACKER_DATABASE_URL", "sqlite:///:memory:")

    assert resolve_database_url() == "sqlite:///:memory:"
    assert resolve_database_url(str(tmp_path / "a.db")) == f"sqlite:///{tmp_path / 'a.db'}"


def test_setup_logging_debug():
    settings = Settings(environment=Environment.TEST, database_url="sqlite://", user_id=1)

    settings.setup_logging(debug=True)

    assert logging.getLogger("expense_tracker").level == logging.DEBUG

    settings.setup_logging()

    assert logging.getLogger("expense_tracker").level == logging.WARNING
