"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class PermissionDeniedError(DomainError):
    """Entity exists but belongs to a different user."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class StorageError(DomainError):
    """A storage statement or transaction failed; the unit of work was rolled back."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def pattern_not_found(pattern_id: int) -> str:
    """Return message for missing merchant pattern."""
    return f"Pattern {pattern_id} not found"


def permission_denied(entity: str, entity_id: int) -> str:
    """Return message when the acting user does not own the entity."""
    return f"Permission denied for {entity} {entity_id}"


def account_adjustment_failed(account_id: int, user_id: int) -> str:
    """Return message when the balance update touched no account row."""
    return f"Account {account_id} not found for user {user_id}; changes rolled back"


def duplicate_pattern(merchant_name: str) -> str:
    """Return message for a second pattern on the same merchant name."""
    return f"Pattern already exists for merchant '{merchant_name}'"


def delete_blocked(entity: str, entity_id: int, count: int, dependent: str = "expense") -> str:
    """Return message when an account or category still has dependent rows."""
    return (
        f"Cannot delete {entity} {entity_id}: it has "
        f"{count} {dependent}{'s' if count != 1 else ''}. "
        "Please delete them first."
    )
