"""Utility for resolving category names to IDs."""

from expense_tracker.domain.category import CategoryService


def resolve_category(category_service: CategoryService, user_id: int, category: str | int) -> int:
    """Resolve category name or ID to the ID of a category visible to the user.

    Names are compared case-insensitively.

    Raises:
        NotFoundError: If no matching category is visible to the user
    """
    try:
        category_id = int(category)
    except (ValueError, TypeError):
        category_id = None

    if category_id is not None:
        return category_service.get_category(category_id, user_id).id

    return category_service.find_category_by_name(user_id, str(category)).id
