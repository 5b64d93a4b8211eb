"""CSV export of transactions and categories."""

import logging
from datetime import UTC, date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

from fintrack.database.base import Database
from fintrack.domain.entities import Category, Transaction
from fintrack.domain.errors import ValidationError

logger = logging.getLogger(__name__)

TRANSACTION_HEADERS = ["Date", "Type", "Category", "Amount", "Description", "Notes", "Tags"]
CATEGORY_HEADERS = ["Name", "Type", "Color", "Icon"]
SECTION_SEPARATOR = "\n\n---CATEGORIES---\n"
UNKNOWN_CATEGORY = "Unknown"

EXPORT_KINDS = ("transactions", "categories", "both")


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _quote_if_needed(value: str) -> str:
    if any(ch in value for ch in ',"\r\n'):
        return _quote(value)
    return value


def _utc_day(value: datetime) -> str:
    # Naive datetimes are taken as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%d")


def format_amount(amount: Decimal) -> str:
    """Render an amount as a plain number: ``1500``, ``1234.5``, ``0.25``."""
    normalized = Decimal(amount).normalize()
    return format(normalized, "f")


def transactions_to_csv(
    transactions: Sequence[Transaction], categories: Sequence[Category]
) -> str:
    """Serialize transactions to CSV text.

    Columns are ``Date,Type,Category,Amount,Description,Notes,Tags``. The
    description is always quoted, notes are quoted when present, and the
    category name is quoted when it contains a delimiter. Category ids that
    match no category (including ``missing:`` placeholders) export as
    "Unknown". Lines are joined with ``\\n`` and there is no trailing newline.
    """
    names = {c.id: c.name for c in categories}
    lines = [",".join(TRANSACTION_HEADERS)]

    for t in transactions:
        line = [
            _utc_day(t.date),
            t.type.value,
            _quote_if_needed(names.get(t.category_id) or UNKNOWN_CATEGORY),
            format_amount(t.amount),
            _quote(t.description or ""),
            _quote(t.notes) if t.notes else "",
            ";".join(t.tags) if t.tags else "",
        ]
        lines.append(",".join(line))

    return "\n".join(lines)


def categories_to_csv(categories: Sequence[Category]) -> str:
    """Serialize categories to CSV text with columns ``Name,Type,Color,Icon``.

    A field is wrapped in quotes only when it contains a comma.
    """
    lines = [",".join(CATEGORY_HEADERS)]
    for cat in categories:
        fields = [cat.name, cat.type.value, cat.color, cat.icon or ""]
        lines.append(",".join(f'"{f}"' if "," in f else f for f in fields))
    return "\n".join(lines)


def combined_export(
    transactions: Sequence[Transaction], categories: Sequence[Category]
) -> str:
    """Transactions CSV followed by a ``---CATEGORIES---`` section."""
    return (
        transactions_to_csv(transactions, categories)
        + SECTION_SEPARATOR
        + categories_to_csv(categories)
    )


def export_filename(kind: str, on: Optional[date] = None) -> str:
    """Return the download filename for an export kind.

    Raises:
        ValueError: If kind is not transactions, categories or both
    """
    stamp = (on or date.today()).isoformat()
    if kind == "transactions":
        return f"transactions_{stamp}.csv"
    if kind == "categories":
        return f"categories_{stamp}.csv"
    if kind == "both":
        return f"fintrack_export_{stamp}.csv"
    raise ValueError(f"Unknown export kind '{kind}'. Must be one of: {', '.join(EXPORT_KINDS)}")


def write_export(path: Path, content: str) -> Path:
    """Write export content to disk exactly as generated."""
    path = Path(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


class CSVExportService:
    """Service for exporting stored data as CSV."""

    def __init__(self, db: Database):
        """Initialize CSV export service.

        Args:
            db: Database instance
        """
        self.db = db

    def export(
        self,
        kind: str = "transactions",
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        on: Optional[date] = None,
    ) -> tuple[str, str]:
        """Build an export.

        Args:
            kind: "transactions", "categories" or "both"
            start_date: Optional inclusive start date for transactions
            end_date: Optional inclusive end date for transactions
            on: Date stamped into the filename (default today)

        Returns:
            Tuple of (filename, CSV content)

        Raises:
            ValidationError: If transactions are requested and none match
            ValueError: If kind is unknown
        """
        filename = export_filename(kind, on)
        categories = self.db.list_categories()

        if kind == "categories":
            return filename, categories_to_csv(categories)

        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)
        if not transactions:
            raise ValidationError("No transactions found for export")

        logger.info("Exporting %d transactions", len(transactions))
        if kind == "both":
            return filename, combined_export(transactions, categories)
        return filename, transactions_to_csv(transactions, categories)
