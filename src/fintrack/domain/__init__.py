"""Domain layer for fintrack application."""

from fintrack.domain.entities import (
    Category,
    ImportResult,
    ParsedTable,
    Transaction,
    TransactionType,
)

__all__ = [
    "Category",
    "ImportResult",
    "ParsedTable",
    "Transaction",
    "TransactionType",
]
