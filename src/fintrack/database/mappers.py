"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the naive-UTC storage of
timestamps, from both the domain and the queries.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def to_storage_datetime(value: datetime) -> datetime:
    """Convert an aware datetime to the naive UTC form stored in the database."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime loaded from the database."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        type=domain.TransactionType(orm_category.type),
        color=orm_category.color,
        icon=orm_category.icon,
        created_at=from_storage_datetime(orm_category.created_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=from_storage_datetime(orm_transaction.date),
        amount=Decimal(orm_transaction.amount),
        category_id=orm_transaction.category_id,
        type=domain.TransactionType(orm_transaction.type),
        description=orm_transaction.description,
        created_at=from_storage_datetime(orm_transaction.created_at),
        notes=orm_transaction.notes,
        tags=tuple(orm_transaction.tags) if orm_transaction.tags else None,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert a domain Transaction entity to a new SQLAlchemy model."""
    return ORMTransaction(
        id=transaction.id,
        date=to_storage_datetime(transaction.date),
        amount=str(transaction.amount),
        category_id=transaction.category_id,
        type=transaction.type.value,
        description=transaction.description,
        notes=transaction.notes,
        tags=list(transaction.tags) if transaction.tags else None,
        created_at=to_storage_datetime(transaction.created_at),
    )
