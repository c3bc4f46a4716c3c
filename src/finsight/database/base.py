"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finsight.domain.entities import (
    Asset,
    Category,
    Investment,
    Transaction,
    TransactionType,
    User,
)


class Database(ABC):
    """Abstract persistence interface for finsight.

    Implementations raise PersistenceUnavailableError when the backing store
    cannot be read or written.
    """

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

    # User operations
    @abstractmethod
    def create_user(self, user_id: str, name: str, email: Optional[str] = None) -> str:
        """Create a user profile. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, category_type: Optional[str] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, compared case-insensitively."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: str,
        transaction_type: TransactionType,
        amount: Decimal,
        date: date,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
        is_approved: bool = False,
        receipt_url: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List a user's transactions, newest first, with category names.

        Args:
            user_id: Owner of the transactions
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            transaction_type: Optional type filter
        """
        pass

    # Asset operations
    @abstractmethod
    def create_asset(
        self,
        user_id: str,
        name: str,
        purchase_date: date,
        purchase_price: Decimal,
        current_value: Optional[Decimal] = None,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create an asset. Returns asset ID."""
        pass

    @abstractmethod
    def list_assets(self, user_id: str) -> list[Asset]:
        """List a user's assets."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment(
        self,
        user_id: str,
        name: str,
        investment_type: str,
        purchase_date: date,
        purchase_price: Decimal,
        current_value: Optional[Decimal] = None,
        quantity: Optional[Decimal] = None,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create an investment. Returns investment ID."""
        pass

    @abstractmethod
    def list_investments(self, user_id: str) -> list[Investment]:
        """List a user's investments."""
        pass
