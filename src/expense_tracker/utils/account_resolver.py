"""Utility for resolving account names to IDs."""

from expense_tracker.domain.account import AccountService
from expense_tracker.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, user_id: int, account: str | int) -> int:
    """Resolve account name or ID to an ID of one of the user's accounts.

    Args:
        account_service: AccountService instance
        user_id: Acting user
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If no matching account exists
        PermissionDeniedError: If the ID belongs to another user
    """
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        return account_service.get_account(account_id, user_id).id

    for acc in account_service.list_accounts(user_id):
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
