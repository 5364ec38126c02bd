"""Command-line interface for expense_tracker."""
