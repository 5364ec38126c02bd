"""Category domain service."""

import logging
import re

from expense_tracker.database.base import Database
from expense_tracker.domain.entities import Category as CategoryEntity
from expense_tracker.domain.errors import (
    DependencyError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    category_not_found,
    delete_blocked,
)

logger = logging.getLogger(__name__)

# System-wide categories visible to every user
DEFAULT_CATEGORIES = [
    ("Food & Dining", "#FF6B6B"),
    ("Transportation", "#4ECDC4"),
    ("Shopping", "#45B7D1"),
    ("Bills & Utilities", "#96CEB4"),
    ("Entertainment", "#FFEAA7"),
    ("Health & Fitness", "#DDA0DD"),
    ("Travel", "#98D8C8"),
    ("Other", "#B0B0B0"),
]

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_default_categories(self) -> int:
        """Create any missing system default categories.

        Returns:
            Number of categories created
        """
        # Defaults are listed for every user
        existing = {cat.name for cat in self.db.list_categories(user_id=0) if cat.is_default}
        created = 0
        for name, color in DEFAULT_CATEGORIES:
            if name not in existing:
                self.db.create_category(name=name, color=color, user_id=None, is_default=True)
                created += 1
        if created:
            logger.info("Seeded %d default categories", created)
        return created

    def list_categories(self, user_id: int) -> list[CategoryEntity]:
        """List default categories followed by the user's own."""
        return self.db.list_categories(user_id)

    def get_category(self, category_id: int, user_id: int) -> CategoryEntity:
        """Get a category visible to the user.

        Raises:
            NotFoundError: If category not found or belongs to another user
        """
        category = self.db.get_category(category_id)
        if category is None or not category.is_visible_to(user_id):
            raise NotFoundError(category_not_found(category_id))
        return category

    def find_category_by_name(self, user_id: int, name: str) -> CategoryEntity:
        """Find a visible category by case-insensitive name.

        Raises:
            NotFoundError: If no visible category has that name
        """
        wanted = name.strip().lower()
        for category in self.db.list_categories(user_id):
            if category.name.lower() == wanted:
                return category
        raise NotFoundError(f"Category '{name}' not found")

    def create_category(self, user_id: int, name: str, color: str) -> CategoryEntity:
        """Create a custom category for the user.

        Raises:
            ValidationError: If name is blank or color is not #RRGGBB
        """
        self._validate(name, color)
        category = self.db.create_category(name=name.strip(), color=color, user_id=user_id)
        logger.info("Category created: category_id=%s user_id=%s name=%s", category.id, user_id, category.name)
        return category

    def update_category(self, category_id: int, user_id: int, name: str, color: str) -> CategoryEntity:
        """Update one of the user's custom categories.

        Raises:
            ValidationError: If name is blank or color is not #RRGGBB
            NotFoundError: If category not found
            PermissionDeniedError: If the category is a default or belongs to another user
        """
        self._validate(name, color)
        self._require_own(category_id, user_id)
        category = self.db.update_category(category_id, name=name.strip(), color=color)
        logger.info("Category updated: category_id=%s user_id=%s", category_id, user_id)
        return category

    def delete_category(self, category_id: int, user_id: int) -> None:
        """Delete one of the user's custom categories.

        Raises:
            NotFoundError: If category not found
            PermissionDeniedError: If the category is a default or belongs to another user
            DependencyError: If expenses or merchant patterns still use the category
        """
        self._require_own(category_id, user_id)

        expense_count = self.db.count_expenses(category_id=category_id)
        if expense_count > 0:
            raise DependencyError(delete_blocked("category", category_id, expense_count))

        pattern_count = self.db.count_patterns(category_id)
        if pattern_count > 0:
            raise DependencyError(delete_blocked("category", category_id, pattern_count, "merchant pattern"))

        self.db.delete_category(category_id)
        logger.info("Category deleted: category_id=%s user_id=%s", category_id, user_id)

    def _require_own(self, category_id: int, user_id: int) -> CategoryEntity:
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.is_default:
            raise PermissionDeniedError("Default categories cannot be modified")
        if category.user_id != user_id:
            raise PermissionDeniedError(f"Permission denied for category {category_id}")
        return category

    @staticmethod
    def _validate(name: str, color: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        if not _COLOR_RE.match(color or ""):
            raise ValidationError(f"Color must look like #RRGGBB, got '{color}'")
