"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain services
from fintrack.domain.entities import Category, Transaction, TransactionType


class Database(ABC):
    """Abstract database interface for fintrack."""

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

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        category_type: TransactionType,
        color: str,
        icon: Optional[str] = None,
    ) -> str:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, ignoring case."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        pass

    @abstractmethod
    def update_category(self, category_id: str, **changes) -> None:
        """Update category fields (name, type, color, icon)."""
        pass

    @abstractmethod
    def delete_category(self, category_id: str) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def count_transactions_for_category(self, category_id: str) -> int:
        """Count transactions that reference a category."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transactions(self, transactions: Sequence[Transaction]) -> int:
        """Insert transactions in one commit. Returns the number inserted."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            start_date: Optional inclusive start date filter
            end_date: Optional inclusive end date filter
            category_id: Optional category ID filter
        """
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: str, **changes) -> None:
        """Update transaction fields."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass
