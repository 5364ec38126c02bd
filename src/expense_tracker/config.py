"""Configuration management for expense_tracker.

Settings come from environment variables, optionally loaded from a ``.env``
file in the working directory. Every variable has a default suitable for a
single-user local install.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the application."""

    environment: Environment
    database_url: str
    user_id: int
    log_level: str = "WARNING"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If a variable holds an unusable value
        """
        env_name = os.getenv("EXPENSE_TRACKER_ENVIRONMENT", "development").lower()
        try:
            environment = Environment(env_name)
        except ValueError:
            raise ValueError(f"Invalid EXPENSE_TRACKER_ENVIRONMENT: '{env_name}'")

        user_id_str = os.getenv("EXPENSE_TRACKER_USER_ID", "1")
        try:
            user_id = int(user_id_str)
        except ValueError:
            raise ValueError(f"Invalid EXPENSE_TRACKER_USER_ID: '{user_id_str}'")

        log_level = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "WARNING").upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Invalid EXPENSE_TRACKER_LOG_LEVEL: '{log_level}'")

        return cls(
            environment=environment,
            database_url=resolve_database_url(),
            user_id=user_id,
            log_level=log_level,
        )

    def setup_logging(self, debug: bool = False) -> None:
        """Configure logging based on configuration."""
        level = logging.DEBUG if debug else getattr(logging, self.log_level, logging.WARNING)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("expense_tracker").setLevel(level)

        # SQL echo is far too noisy outside of debugging
        if not debug:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def resolve_database_url(database_path: Optional[str] = None) -> str:
    """Work out which database to open.

    Args:
        database_path: Explicit SQLite file path. If None, checks
            EXPENSE_TRACKER_DATABASE_URL, then EXPENSE_TRACKER_DB_PATH, then
            defaults to ~/.expense_tracker/expenses.db

    Returns:
        SQLAlchemy database URL
    """
    if database_path is None:
        database_url = os.getenv("EXPENSE_TRACKER_DATABASE_URL")
        if database_url:
            return database_url
        database_path = os.getenv("EXPENSE_TRACKER_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".expense_tracker"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "expenses.db")

    return f"sqlite:///{database_path}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings, loading ``.env`` on first use."""
    load_dotenv()
    return Settings.from_environment()


def reload_settings() -> Settings:
    """Drop cached settings and read the environment again (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
