"""Merchant pattern management and merchant-name matching."""

import logging
from typing import Optional

from expense_tracker.database.base import Database
from expense_tracker.domain.entities import (
    MatchResult,
    MatchType,
    MerchantPattern as PatternEntity,
    PatternPatch,
)
from expense_tracker.domain.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    category_not_found,
    duplicate_pattern,
    pattern_not_found,
    permission_denied,
)

logger = logging.getLogger(__name__)


def parse_match_type(value: str | MatchType) -> MatchType:
    """Convert user input to a MatchType.

    Raises:
        ValidationError: If the value is not 'exact' or 'contains'
    """
    if isinstance(value, MatchType):
        return value
    try:
        return MatchType(value.strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in MatchType)
        raise ValidationError(f"Invalid match type '{value}'. Must be one of: {allowed}")


def pattern_matches(pattern: PatternEntity, merchant_name: str) -> bool:
    """Case-insensitive test of one pattern against a merchant name."""
    merchant = merchant_name.lower()
    needle = pattern.merchant_name.lower()
    if pattern.match_type == MatchType.EXACT:
        return merchant == needle
    if pattern.match_type == MatchType.CONTAINS:
        return needle in merchant
    return False


class PatternMatcher:
    """Find the categorization rule that applies to a merchant name.

    Exact patterns are tried before contains patterns; within a type the
    order the store returned them in is kept. The first hit wins. Matching
    is read-only: use counts are not touched.
    """

    def __init__(self, db: Database):
        """Initialize pattern matcher.

        Args:
            db: Database instance
        """
        self.db = db

    def match(self, user_id: int, merchant_name: str) -> MatchResult:
        """Match a merchant name against the user's active patterns.

        Args:
            user_id: Owner of the patterns
            merchant_name: Raw merchant name, any case

        Returns:
            MatchResult with the winning pattern, or ``matched=False`` and no
            pattern when nothing applies
        """
        patterns = self.db.list_active_patterns(user_id)
        # sorted() is stable, so store order survives within each type
        ordered = sorted(patterns, key=lambda p: p.match_type != MatchType.EXACT)

        for pattern in ordered:
            if pattern_matches(pattern, merchant_name):
                logger.debug("Merchant '%s' matched pattern %s for user %s", merchant_name, pattern.id, user_id)
                return MatchResult(matched=True, pattern=pattern)

        return MatchResult(matched=False, pattern=None)


class PatternService:
    """Service for managing merchant patterns."""

    def __init__(self, db: Database):
        """Initialize pattern service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_pattern(
        self, user_id: int, merchant_name: str, category_id: int, match_type: str | MatchType
    ) -> PatternEntity:
        """Create an active pattern.

        Args:
            user_id: Owning user
            merchant_name: Trigger text
            category_id: Category applied on a match
            match_type: 'exact' or 'contains'

        Returns:
            Created pattern

        Raises:
            ValidationError: If merchant name is blank or match type unknown
            NotFoundError: If the category is not visible to the user
            ConflictError: If the user already has a pattern for this merchant name
        """
        if not merchant_name or not merchant_name.strip():
            raise ValidationError("Merchant name is required")
        match_type = parse_match_type(match_type)
        self._require_category(category_id, user_id)

        if self.db.pattern_exists(user_id, merchant_name):
            raise ConflictError(duplicate_pattern(merchant_name))

        pattern = self.db.create_pattern(
            user_id=user_id,
            merchant_name=merchant_name,
            category_id=category_id,
            match_type=match_type,
        )
        logger.info("Pattern created: pattern_id=%s user_id=%s", pattern.id, user_id)
        return pattern

    def get_pattern(self, pattern_id: int, user_id: int) -> PatternEntity:
        """Get a pattern owned by the user.

        Raises:
            NotFoundError: If pattern not found
            PermissionDeniedError: If the pattern belongs to another user
        """
        pattern = self.db.get_pattern(pattern_id)
        if pattern is None:
            raise NotFoundError(pattern_not_found(pattern_id))
        if pattern.user_id != user_id:
            raise PermissionDeniedError(permission_denied("pattern", pattern_id))
        return pattern

    def list_patterns(self, user_id: int, is_active: Optional[bool] = None) -> list[PatternEntity]:
        """List the user's patterns newest first, optionally only (in)active ones."""
        return self.db.list_patterns(user_id, is_active=is_active)

    def update_pattern(self, pattern_id: int, user_id: int, patch: PatternPatch) -> PatternEntity:
        """Change category, match type and/or active flag of a pattern.

        An empty patch only touches ``updated_at``.

        Raises:
            NotFoundError: If the pattern or new category does not exist
            PermissionDeniedError: If the pattern belongs to another user
        """
        self.get_pattern(pattern_id, user_id)
        if patch.category_id is not None:
            self._require_category(patch.category_id, user_id)
        if patch.match_type is not None:
            patch = PatternPatch(
                category_id=patch.category_id,
                match_type=parse_match_type(patch.match_type),
                is_active=patch.is_active,
            )

        pattern = self.db.update_pattern(pattern_id, patch)
        logger.info("Pattern updated: pattern_id=%s user_id=%s", pattern_id, user_id)
        return pattern

    def delete_pattern(self, pattern_id: int, user_id: int) -> None:
        """Delete a pattern.

        Raises:
            NotFoundError: If pattern not found
            PermissionDeniedError: If the pattern belongs to another user
        """
        self.get_pattern(pattern_id, user_id)
        self.db.delete_pattern(pattern_id)
        logger.info("Pattern deleted: pattern_id=%s user_id=%s", pattern_id, user_id)

    def _require_category(self, category_id: int, user_id: int) -> None:
        category = self.db.get_category(category_id)
        if category is None or not category.is_visible_to(user_id):
            raise NotFoundError(category_not_found(category_id))
