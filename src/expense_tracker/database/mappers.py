"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from expense_tracker.domain import entities as domain
from expense_tracker.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Expense as ORMExpense,
    MerchantPattern as ORMMerchantPattern,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        initial_balance=orm_account.initial_balance,
        current_balance=orm_account.current_balance,
        total_spent=orm_account.total_spent,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        name=orm_category.name,
        color=orm_category.color,
        is_default=orm_category.is_default,
        created_at=orm_category.created_at,
        updated_at=orm_category.updated_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        user_id=orm_expense.user_id,
        account_id=orm_expense.account_id,
        category_id=orm_expense.category_id,
        amount=orm_expense.amount,
        date=orm_expense.date,
        description=orm_expense.description,
        source=orm_expense.source,
        merchant_id=orm_expense.merchant_id,
        merchant_name=orm_expense.merchant_name,
        verified=orm_expense.verified,
        created_at=orm_expense.created_at,
        updated_at=orm_expense.updated_at,
    )


def pattern_to_domain(orm_pattern: ORMMerchantPattern) -> domain.MerchantPattern:
    """Convert SQLAlchemy MerchantPattern model to domain MerchantPattern entity."""
    return domain.MerchantPattern(
        id=orm_pattern.id,
        user_id=orm_pattern.user_id,
        merchant_name=orm_pattern.merchant_name,
        category_id=orm_pattern.category_id,
        match_type=domain.MatchType(orm_pattern.match_type),
        is_active=orm_pattern.is_active,
        use_count=orm_pattern.use_count,
        last_used_at=orm_pattern.last_used_at,
        created_at=orm_pattern.created_at,
        updated_at=orm_pattern.updated_at,
    )
