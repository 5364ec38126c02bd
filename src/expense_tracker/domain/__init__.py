"""Domain layer for expense_tracker application.

Services live in their own modules (``ledger``, ``account``, ``category``,
``pattern``); import them from there. This package stays import-free so the
database layer can depend on ``domain.entities`` without a cycle.
"""
