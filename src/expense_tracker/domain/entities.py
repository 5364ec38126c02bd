"""Domain model entities for expense_tracker.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; the ORM models stay
behind the database layer.
"""

from dataclasses import dataclass, fields
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

CENT = Decimal("0.01")


def has_sub_cent_precision(amount: Decimal) -> bool:
    """True when the amount cannot be stored in whole cents without rounding."""
    return amount != amount.quantize(CENT)


class MatchType(str, Enum):
    """How a merchant pattern is compared to a merchant name."""

    EXACT = "exact"
    CONTAINS = "contains"


class ExpenseSource(str, Enum):
    """Where an expense came from."""

    MANUAL = "manual"
    IMPORTED = "imported"


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    user_id: int
    name: str
    initial_balance: Decimal
    current_balance: Decimal
    total_spent: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity. System defaults have no owning user."""

    id: int
    user_id: Optional[int]
    name: str
    color: str
    is_default: bool
    created_at: datetime
    updated_at: datetime

    def is_visible_to(self, user_id: int) -> bool:
        """Defaults are visible to everyone, custom categories only to their owner."""
        return self.is_default or self.user_id == user_id


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    user_id: int
    account_id: int
    category_id: int
    amount: Decimal
    date: date
    description: Optional[str]
    source: str
    merchant_id: Optional[int]
    merchant_name: Optional[str]
    verified: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MerchantPattern:
    """Merchant categorization rule domain entity."""

    id: int
    user_id: int
    merchant_name: str
    category_id: int
    match_type: MatchType
    is_active: bool
    use_count: int
    last_used_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a merchant name against a user's patterns."""

    matched: bool
    pattern: Optional[MerchantPattern] = None


@dataclass(frozen=True)
class AccountSummary:
    """Totals across all accounts of a user."""

    total_initial_balance: Decimal
    total_current_balance: Decimal
    total_spent: Decimal
    account_count: int


@dataclass(frozen=True)
class ExpensePage:
    """One page of an expense listing."""

    expenses: list[Expense]
    total_count: int
    current_page: int
    total_pages: int
    page_total: Decimal

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(frozen=True)
class _Patch:
    """Set of optional field updates. A field is present when it is not None."""

    def present_fields(self) -> dict[str, Any]:
        """Return the present fields as a name -> value mapping."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        """True when no field is present."""
        return not self.present_fields()


@dataclass(frozen=True)
class ExpensePatch(_Patch):
    """Sparse update of an expense. Account and date cannot be changed."""

    amount: Optional[Decimal] = None
    category_id: Optional[int] = None
    description: Optional[str] = None
    verified: Optional[bool] = None


@dataclass(frozen=True)
class PatternPatch(_Patch):
    """Sparse update of a merchant pattern."""

    category_id: Optional[int] = None
    match_type: Optional[MatchType] = None
    is_active: Optional[bool] = None
