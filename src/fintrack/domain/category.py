"""Category domain service."""

import logging
from typing import Optional, Sequence

from fintrack.database.base import Database
from fintrack.domain.entities import Category, TransactionType
from fintrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
    duplicate_category_name,
)

logger = logging.getLogger(__name__)

# Defaults for categories created from unmatched import names
IMPORTED_CATEGORY_COLOR = "#6b7280"
IMPORTED_CATEGORY_ICON = "Tag"
UNCATEGORIZED_NAME = "Uncategorized"


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        category_type: TransactionType = TransactionType.EXPENSE,
        color: str = IMPORTED_CATEGORY_COLOR,
        icon: Optional[str] = None,
    ) -> str:
        """Create a category.

        Args:
            name: Category name, unique ignoring case
            category_type: Income or expense
            color: Hex color
            icon: Optional icon name

        Returns:
            Category ID

        Raises:
            ValidationError: If name is blank
            ConflictError: If a category with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_category_name(name))

        return self.db.create_category(
            name=name, category_type=TransactionType(category_type), color=color, icon=icon
        )

    def get_category(self, category_id: str) -> Optional[Category]:
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        return self.db.get_category_by_name(name.strip())

    def list_categories(self) -> list[Category]:
        return self.db.list_categories()

    def update_category(self, category_id: str, **changes) -> None:
        """Update category fields (name, type, color, icon).

        Raises:
            NotFoundError: If category doesn't exist
            ConflictError: If the new name is taken by another category
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        name = changes.get("name")
        if name is not None:
            existing = self.db.get_category_by_name(name.strip())
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_category_name(name))
            changes["name"] = name.strip()

        self.db.update_category(category_id, **changes)

    def delete_category(self, category_id: str) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If category doesn't exist
            DependencyError: If transactions still use the category
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        count = self.db.count_transactions_for_category(category_id)
        if count > 0:
            raise DependencyError(category_delete_blocked(category_id, count))

        self.db.delete_category(category_id)

    def create_missing(self, names: Sequence[str]) -> tuple[dict[str, str], list[str]]:
        """Make sure a category exists for each imported name.

        Blank names are filed under "Uncategorized". Names that already
        exist (ignoring case) are reused.

        Args:
            names: Category names as they appeared in the import

        Returns:
            Tuple of ({imported name: category id}, names of created categories)
        """
        ids = {}
        created = []
        for name in names:
            target = name.strip() or UNCATEGORIZED_NAME
            existing = self.db.get_category_by_name(target)
            if existing is not None:
                ids[name] = existing.id
                continue

            ids[name] = self.db.create_category(
                name=target,
                category_type=TransactionType.EXPENSE,
                color=IMPORTED_CATEGORY_COLOR,
                icon=IMPORTED_CATEGORY_ICON,
            )
            created.append(target)
            logger.info("Created category '%s' for imported transactions", target)

        return ids, created
