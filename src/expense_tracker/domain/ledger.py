"""Ledger service: expense mutations that keep account balances consistent."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from expense_tracker.database.base import Database, StorageTransaction
from expense_tracker.domain.entities import (
    Expense as ExpenseEntity,
    ExpensePage,
    ExpensePatch,
    ExpenseSource,
    has_sub_cent_precision,
)
from expense_tracker.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
    account_adjustment_failed,
    account_not_found,
    category_not_found,
    expense_not_found,
    permission_denied,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class LedgerService:
    """Create, update and delete expenses together with their account effect.

    Every mutation runs in a single storage transaction. An account's
    ``current_balance`` and ``total_spent`` move by the same amount in opposite
    directions, so ``current_balance == initial_balance - total_spent`` holds
    after each commit.
    """

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_expense(
        self,
        user_id: int,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> ExpenseEntity:
        """Record a manual expense and charge it to the account.

        Args:
            user_id: Acting user
            account_id: Account to charge
            category_id: Category of the expense
            amount: Positive amount
            date: Transaction date
            description: Optional free-text description
            merchant_name: Optional merchant name

        Returns:
            The created expense

        Raises:
            ValidationError: If amount is not positive or not in whole cents
            NotFoundError: If the category does not exist for this user
            StorageError: If the account row was not updated (missing or not
                owned by the user) or the store failed; nothing is persisted
        """
        self._validate_amount(amount)

        with self.db.transaction() as txn:
            self._require_category(txn, category_id, user_id)
            expense = txn.insert_expense(
                user_id=user_id,
                account_id=account_id,
                category_id=category_id,
                amount=amount,
                date=date,
                description=description,
                source=ExpenseSource.MANUAL.value,
                merchant_name=merchant_name,
                verified=True,
            )
            self._adjust_account(txn, account_id, user_id, amount)

        logger.info("Expense created: expense_id=%s user_id=%s account_id=%s", expense.id, user_id, account_id)
        return expense

    def update_expense(self, expense_id: int, user_id: int, patch: ExpensePatch) -> ExpenseEntity:
        """Apply a sparse update to an expense.

        When the amount changes, the owning account absorbs the difference in
        the same transaction.

        Args:
            expense_id: Expense to update
            user_id: Acting user
            patch: Fields to change; at least one must be present

        Returns:
            The expense as committed

        Raises:
            ValidationError: If the patch is empty or the new amount is not a
                positive whole-cent value
            NotFoundError: If the expense or the new category does not exist
            PermissionDeniedError: If the expense belongs to another user
            StorageError: If the account adjustment failed or the store failed
        """
        if patch.is_empty():
            raise ValidationError("No fields to update")
        if patch.amount is not None:
            self._validate_amount(patch.amount)

        with self.db.transaction() as txn:
            old = self._require_owned_expense(txn, expense_id, user_id)
            if patch.category_id is not None:
                self._require_category(txn, patch.category_id, user_id)

            if txn.update_expense(expense_id, patch) == 0:
                raise StorageError(expense_not_found(expense_id))

            if patch.amount is not None and patch.amount != old.amount:
                delta = patch.amount - old.amount
                self._adjust_account(txn, old.account_id, user_id, delta)

            updated = txn.get_expense(expense_id)

        logger.info("Expense updated: expense_id=%s user_id=%s fields=%s", expense_id, user_id, sorted(patch.present_fields()))
        return updated

    def delete_expense(self, expense_id: int, user_id: int) -> None:
        """Delete an expense and give its amount back to the account.

        Raises:
            NotFoundError: If the expense does not exist
            PermissionDeniedError: If the expense belongs to another user
            StorageError: If either statement touched no row or the store failed
        """
        with self.db.transaction() as txn:
            expense = self._require_owned_expense(txn, expense_id, user_id)

            if txn.delete_expense(expense_id) == 0:
                raise StorageError(expense_not_found(expense_id))
            self._adjust_account(txn, expense.account_id, user_id, -expense.amount)

        logger.info("Expense deleted: expense_id=%s user_id=%s", expense_id, user_id)

    def get_expense(self, expense_id: int, user_id: int) -> ExpenseEntity:
        """Get an expense owned by the user.

        Raises:
            NotFoundError: If the expense does not exist
            PermissionDeniedError: If the expense belongs to another user
        """
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise NotFoundError(expense_not_found(expense_id))
        if expense.user_id != user_id:
            raise PermissionDeniedError(permission_denied("expense", expense_id))
        return expense

    def list_expenses(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> ExpensePage:
        """List a user's expenses one page at a time, newest first.

        Out-of-range paging values fall back to defaults: ``page`` below 1
        becomes 1 and ``limit`` outside 1..100 becomes 20. Months outside
        1..12 and non-positive years are ignored.

        Raises:
            NotFoundError: If ``account_id`` is given and does not exist
            PermissionDeniedError: If ``account_id`` belongs to another user
        """
        if account_id is not None:
            account = self.db.get_account(account_id)
            if account is None:
                raise NotFoundError(account_not_found(account_id))
            if account.user_id != user_id:
                raise PermissionDeniedError(permission_denied("account", account_id))

        page = max(page, 1)
        if limit < 1 or limit > MAX_PAGE_SIZE:
            limit = DEFAULT_PAGE_SIZE
        if year is not None and year <= 0:
            year = None
        if month is not None and not 1 <= month <= 12:
            month = None

        expenses = self.db.list_expenses(
            user_id=user_id,
            account_id=account_id,
            year=year,
            month=month,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total_count = self.db.count_expenses(user_id=user_id, account_id=account_id, year=year, month=month)

        return ExpensePage(
            expenses=expenses,
            total_count=total_count,
            current_page=page,
            total_pages=(total_count + limit - 1) // limit,
            page_total=sum((exp.amount for exp in expenses), Decimal("0")),
        )

    def _adjust_account(self, txn: StorageTransaction, account_id: int, user_id: int, spent_delta: Decimal) -> None:
        if txn.adjust_account_balance(account_id, user_id, spent_delta) == 0:
            logger.warning("Account adjustment touched no row: account_id=%s user_id=%s", account_id, user_id)
            raise StorageError(account_adjustment_failed(account_id, user_id))

    def _require_owned_expense(self, txn: StorageTransaction, expense_id: int, user_id: int) -> ExpenseEntity:
        expense = txn.get_expense(expense_id)
        if expense is None:
            raise NotFoundError(expense_not_found(expense_id))
        if expense.user_id != user_id:
            logger.warning("Expense %s access denied for user %s", expense_id, user_id)
            raise PermissionDeniedError(permission_denied("expense", expense_id))
        return expense

    def _require_category(self, txn: StorageTransaction, category_id: int, user_id: int) -> None:
        category = txn.get_category(category_id)
        if category is None or not category.is_visible_to(user_id):
            raise NotFoundError(category_not_found(category_id))

    @staticmethod
    def _validate_amount(amount: Decimal) -> None:
        if amount <= 0:
            raise ValidationError(f"Amount must be greater than zero, got {amount}")
        # Amounts are stored and summed as whole cents
        if has_sub_cent_precision(amount):
            raise ValidationError(f"Amount must have at most two decimal places, got {amount}")
