"""Transaction domain service."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Optional, Sequence
from uuid import uuid4

from fintrack.database.base import Database
from fintrack.domain.entities import Transaction, TransactionType
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    transaction_not_found,
)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        date: datetime,
        amount: Decimal,
        category_id: str,
        type: TransactionType = TransactionType.EXPENSE,
        description: str = "",
        notes: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
    ) -> str:
        """Create a transaction.

        Args:
            date: Transaction timestamp
            amount: Non-negative amount
            category_id: Existing category ID
            type: Income or expense
            description: Description text
            notes: Optional notes
            tags: Optional tags

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is negative
            NotFoundError: If category doesn't exist
        """
        if amount < 0:
            raise ValidationError("Amount cannot be negative")

        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        transaction = Transaction(
            id=str(uuid4()),
            date=date,
            amount=amount,
            category_id=category_id,
            type=TransactionType(type),
            description=description,
            created_at=datetime.now(UTC),
            notes=notes,
            tags=tuple(tags) if tags else None,
        )
        self.db.add_transactions([transaction])
        return transaction.id

    def add_many(self, transactions: Sequence[Transaction]) -> int:
        """Persist already-built transactions in one batch.

        Raises:
            ValidationError: If a transaction still carries a placeholder
                category id
        """
        unresolved = sorted(
            {t.category_id for t in transactions if self.db.get_category(t.category_id) is None}
        )
        if unresolved:
            raise ValidationError(f"Unresolved category ids: {', '.join(unresolved)}")
        return self.db.add_transactions(transactions)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, oldest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            category_id: Optional category filter

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            start_date=start_date, end_date=end_date, category_id=category_id
        )

    def update_transaction(self, transaction_id: str, **changes) -> None:
        """Update transaction fields.

        Raises:
            NotFoundError: If transaction or new category doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        category_id = changes.get("category_id")
        if category_id is not None and self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        self.db.update_transaction(transaction_id, **changes)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)
