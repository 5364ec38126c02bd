"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from expense_tracker.domain.entities import (
    Account,
    AccountSummary,
    Category,
    Expense,
    ExpensePatch,
    MatchType,
    MerchantPattern,
    PatternPatch,
)


class StorageTransaction(ABC):
    """One atomic unit of work against the store.

    Statements run on the same underlying connection and become visible to
    other units of work only after ``commit``.
    """

    @abstractmethod
    def commit(self) -> None:
        """Commit the unit of work."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the unit of work.

        Must be safe to call after a failed commit or when no statement ran.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection."""
        pass

    # Point reads
    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_pattern(self, pattern_id: int) -> Optional[MerchantPattern]:
        """Get merchant pattern by ID."""
        pass

    # Expense statements
    @abstractmethod
    def insert_expense(
        self,
        user_id: int,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: Optional[str],
        source: str,
        merchant_name: Optional[str],
        verified: bool,
    ) -> Expense:
        """Insert an expense row and return it."""
        pass

    @abstractmethod
    def update_expense(self, expense_id: int, patch: ExpensePatch) -> int:
        """Apply the present patch fields to an expense. Returns affected row count."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> int:
        """Delete an expense row. Returns affected row count."""
        pass

    # Account statements
    @abstractmethod
    def adjust_account_balance(self, account_id: int, user_id: int, spent_delta: Decimal) -> int:
        """Apply ``current_balance -= spent_delta; total_spent += spent_delta``.

        Filters on both account and owner. Returns affected row count.
        """
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: str,
        initial_balance: Decimal,
        balance_shift: Decimal,
    ) -> int:
        """Rename an account and set its initial balance.

        The current balance moves by ``balance_shift`` in the same statement.
        Returns affected row count.
        """
        pass


class Database(ABC):
    """Abstract database interface for expense_tracker."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transactions
    @abstractmethod
    def begin(self) -> StorageTransaction:
        """Start a new unit of work."""
        pass

    @contextmanager
    def transaction(self) -> Iterator[StorageTransaction]:
        """Scoped unit of work: commit on success, roll back on any exception."""
        txn = self.begin()
        try:
            yield txn
            txn.commit()
        except Exception:
            txn.rollback()
            raise
        finally:
            txn.close()

    # Account operations
    @abstractmethod
    def create_account(self, user_id: int, name: str, initial_balance: Decimal) -> Account:
        """Create an account with current balance equal to the initial balance."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: int) -> list[Account]:
        """List a user's accounts, newest first."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_summary(self, user_id: int) -> AccountSummary:
        """Sum balances and spend over a user's accounts."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, color: str, user_id: Optional[int] = None, is_default: bool = False
    ) -> Category:
        """Create a category. Defaults have no owning user."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, user_id: int) -> list[Category]:
        """List default categories and the user's own, defaults first then by name."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, name: str, color: str) -> Category:
        """Update category name and color."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    # Expense operations
    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Expense]:
        """List a user's expenses, newest date first.

        Args:
            user_id: Owning user
            account_id: Optional account filter
            year: Optional calendar year filter
            month: Optional calendar month filter (1-12)
            limit: Optional maximum number of rows
            offset: Rows to skip
        """
        pass

    @abstractmethod
    def count_expenses(
        self,
        user_id: Optional[int] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> int:
        """Count expenses matching the given filters."""
        pass

    # Merchant pattern operations
    @abstractmethod
    def count_patterns(self, category_id: int) -> int:
        """Count merchant patterns of any user that apply a category."""
        pass

    @abstractmethod
    def create_pattern(
        self, user_id: int, merchant_name: str, category_id: int, match_type: MatchType
    ) -> MerchantPattern:
        """Create an active merchant pattern with zero use count."""
        pass

    @abstractmethod
    def get_pattern(self, pattern_id: int) -> Optional[MerchantPattern]:
        """Get merchant pattern by ID."""
        pass

    @abstractmethod
    def pattern_exists(self, user_id: int, merchant_name: str) -> bool:
        """Check whether the user already has a pattern for this merchant name."""
        pass

    @abstractmethod
    def list_patterns(self, user_id: int, is_active: Optional[bool] = None) -> list[MerchantPattern]:
        """List a user's patterns newest first, optionally filtered by active flag."""
        pass

    @abstractmethod
    def list_active_patterns(self, user_id: int) -> list[MerchantPattern]:
        """List a user's active patterns, exact patterns before contains patterns."""
        pass

    @abstractmethod
    def update_pattern(self, pattern_id: int, patch: PatternPatch) -> MerchantPattern:
        """Apply the present patch fields to a pattern and return it."""
        pass

    @abstractmethod
    def delete_pattern(self, pattern_id: int) -> None:
        """Delete a merchant pattern."""
        pass
