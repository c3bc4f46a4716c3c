"""Category domain service."""

from typing import Optional

from finsight.database.base import Database
from finsight.domain.entities import Category
from finsight.domain.errors import ConflictError, ValidationError, duplicate_category

CATEGORY_TYPES = ("income", "expense", "asset", "investment", "transaction")


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, category_type: Optional[str] = None) -> int:
        """Create a category.

        Args:
            name: Category name, unique regardless of case
            category_type: Optional kind (income, expense, asset, investment, transaction)

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or the type is unknown
            ConflictError: If a category with that name already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        if category_type is not None and category_type not in CATEGORY_TYPES:
            raise ValidationError(
                f"Invalid category type '{category_type}'. Must be one of: "
                + ", ".join(CATEGORY_TYPES)
            )
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_category(name))

        return self.db.create_category(name, category_type=category_type)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        return self.db.get_category_by_name(name)

    def list_categories(self) -> list[Category]:
        """List categories ordered by name."""
        return self.db.list_categories()
