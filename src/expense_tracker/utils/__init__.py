"""Utility functions for expense_tracker."""

from expense_tracker.utils.date_parser import parse_date, parse_month
from expense_tracker.utils.amount_parser import parse_amount
from expense_tracker.utils.account_resolver import resolve_account
from expense_tracker.utils.category_resolver import resolve_category

__all__ = ["parse_date", "parse_month", "parse_amount", "resolve_account", "resolve_category"]
