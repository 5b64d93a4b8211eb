"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema and of the CSV layout they were imported from.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: str
    name: str
    type: TransactionType
    color: str
    icon: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``category_id`` may hold a sentinel of the form ``missing:<name>`` for
    imported rows whose category has not been created yet.
    """

    id: str
    date: datetime
    amount: Decimal
    category_id: str
    type: TransactionType
    description: str
    created_at: datetime
    notes: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class ParsedTable:
    """Header row and field-maps produced by the CSV tokenizer."""

    headers: tuple[str, ...]
    rows: tuple[dict[str, str], ...]

    @property
    def duplicate_headers(self) -> list[str]:
        """Header names that occur more than once, in first-seen order."""
        seen = set()
        duplicates = []
        for header in self.headers:
            if header in seen and header not in duplicates:
                duplicates.append(header)
            seen.add(header)
        return duplicates


@dataclass(frozen=True)
class ImportResult:
    """Outcome of mapping a parsed table onto transactions."""

    transactions: tuple[Transaction, ...]
    errors: tuple[str, ...]
    missing_categories: tuple[str, ...]

    @property
    def imported_count(self) -> int:
        return len(self.transactions)

    @property
    def error_count(self) -> int:
        return len(self.errors)
