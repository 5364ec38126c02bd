"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from expense_tracker.cli.error_handling import handle_domain_error
from expense_tracker.domain.account import AccountService
from expense_tracker.domain.errors import DomainError
from expense_tracker.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, user_id: int, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, user_id, account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
