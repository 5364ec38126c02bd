"""Account domain service."""

import logging
from decimal import Decimal

from expense_tracker.database.base import Database
from expense_tracker.domain.entities import Account as AccountEntity, AccountSummary, has_sub_cent_precision
from expense_tracker.domain.errors import (
    DependencyError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
    account_not_found,
    delete_blocked,
    permission_denied,
)
from expense_tracker.domain.reconciler import AccountInvariantReconciler

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database, reconciler: AccountInvariantReconciler | None = None):
        """Initialize account service.

        Args:
            db: Database instance
            reconciler: Balance reconciler (a default one is created if omitted)
        """
        self.db = db
        self.reconciler = reconciler or AccountInvariantReconciler()

    def create_account(self, user_id: int, name: str, initial_balance: Decimal) -> AccountEntity:
        """Create a new account.

        Args:
            user_id: Owning user
            name: Account name
            initial_balance: Opening balance (must not be negative)

        Returns:
            Created account with current balance equal to the initial balance

        Raises:
            ValidationError: If name is blank or initial balance is negative or
                not in whole cents
        """
        self._validate(name, initial_balance)
        account = self.db.create_account(user_id=user_id, name=name.strip(), initial_balance=initial_balance)
        logger.info("Account created: account_id=%s user_id=%s", account.id, user_id)
        return account

    def get_account(self, account_id: int, user_id: int) -> AccountEntity:
        """Get an account owned by the user.

        Raises:
            NotFoundError: If account not found
            PermissionDeniedError: If the account belongs to another user
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if account.user_id != user_id:
            raise PermissionDeniedError(permission_denied("account", account_id))
        return account

    def list_accounts(self, user_id: int) -> list[AccountEntity]:
        """List the user's accounts, newest first."""
        return self.db.list_accounts(user_id)

    def update_account(
        self, account_id: int, user_id: int, name: str, initial_balance: Decimal
    ) -> AccountEntity:
        """Rename an account and/or change its initial balance.

        A changed initial balance shifts the current balance by the same
        amount, so expenses already recorded keep their effect.

        Raises:
            ValidationError: If name is blank or initial balance is negative or
                not in whole cents
            NotFoundError: If account not found
            PermissionDeniedError: If the account belongs to another user
        """
        self._validate(name, initial_balance)

        with self.db.transaction() as txn:
            account = txn.get_account(account_id)
            if account is None:
                raise NotFoundError(account_not_found(account_id))
            if account.user_id != user_id:
                raise PermissionDeniedError(permission_denied("account", account_id))

            new_current_balance = self.reconciler.reconcile_on_initial_balance_change(
                account_id=account_id,
                old_initial_balance=account.initial_balance,
                old_current_balance=account.current_balance,
                new_initial_balance=initial_balance,
            )
            balance_shift = new_current_balance - account.current_balance
            if txn.update_account(account_id, name.strip(), initial_balance, balance_shift) == 0:
                raise StorageError(account_not_found(account_id))
            updated = txn.get_account(account_id)

        logger.info("Account updated: account_id=%s user_id=%s", account_id, user_id)
        return updated

    def delete_account(self, account_id: int, user_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            PermissionDeniedError: If the account belongs to another user
            DependencyError: If the account still has expenses
        """
        self.get_account(account_id, user_id)

        expense_count = self.db.count_expenses(account_id=account_id)
        if expense_count > 0:
            raise DependencyError(delete_blocked("account", account_id, expense_count))

        self.db.delete_account(account_id)
        logger.info("Account deleted: account_id=%s user_id=%s", account_id, user_id)

    def get_summary(self, user_id: int) -> AccountSummary:
        """Totals across all of the user's accounts."""
        return self.db.get_account_summary(user_id)

    @staticmethod
    def _validate(name: str, initial_balance: Decimal) -> None:
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        if initial_balance < 0:
            raise ValidationError(f"Initial balance must not be negative, got {initial_balance}")
        if has_sub_cent_precision(initial_balance):
            raise ValidationError(f"Initial balance must have at most two decimal places, got {initial_balance}")
