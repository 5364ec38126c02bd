"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last friday"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    if date_str == "today":
        return today
    if date_str == "yesterday":
        return today - timedelta(days=1)

    if date_str.startswith("last "):
        day = date_str[5:]
        if day in _WEEKDAYS:
            days_ago = (today.weekday() - _WEEKDAYS.index(day)) % 7
            return today - timedelta(days=days_ago or 7)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> tuple[int, int]:
    """Parse "YYYY-MM" into (year, month).

    Raises:
        ValueError: If the string is not a valid year-month
    """
    try:
        year_part, month_part = month_str.strip().split("-")
        year, month = int(year_part), int(month_part)
    except ValueError:
        raise ValueError(f"Expected YYYY-MM, got '{month_str}'")
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")
    return year, month
