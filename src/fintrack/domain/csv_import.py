"""CSV import domain service."""

import logging
import re
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Optional, Sequence
from uuid import uuid4

from fintrack.database.base import Database
from fintrack.domain.category import CategoryService
from fintrack.domain.csv_format import (
    ColumnMapping,
    LogicalField,
    suggest_mapping,
    validate_mapping,
)
from fintrack.domain.entities import (
    Category,
    ImportResult,
    ParsedTable,
    Transaction,
    TransactionType,
)
from fintrack.domain.errors import ValidationError, unmatched_categories
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.csv_parser import parse_csv
from fintrack.utils.date_parser import parse_smart_date

logger = logging.getLogger(__name__)

MISSING_PREFIX = "missing:"
DEFAULT_DESCRIPTION = "Imported transaction"
_TAG_SEPARATORS = re.compile(r"[,;|]")


def missing_category_id(name: str) -> str:
    """Return the placeholder category id for an unmatched category name."""
    return f"{MISSING_PREFIX}{name.lower()}"


def _default_clock() -> datetime:
    return datetime.now(UTC)


def _default_id() -> str:
    return str(uuid4())


def _split_tags(raw: str) -> Optional[tuple[str, ...]]:
    tags = [t.strip() for t in _TAG_SEPARATORS.split(raw)]
    unique = tuple(dict.fromkeys(t for t in tags if t))
    return unique or None


def csv_to_transactions(
    table: ParsedTable,
    mapping: ColumnMapping,
    categories: Sequence[Category],
    *,
    clock: Optional[Callable[[], datetime]] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> ImportResult:
    """Map parsed CSV rows onto transactions.

    Each row produces either one transaction or one error message, never
    both. A bad date or amount skips the row with an error; an unknown
    category does not: the transaction gets a ``missing:<name>`` category id
    and the name is reported once in ``missing_categories``.

    Row numbers in messages count the header as row 1, so the first data
    row is row 2.

    Args:
        table: Tokenizer output
        mapping: Header assigned to each logical field
        categories: Existing categories, matched by name ignoring case
        clock: Source of the ``created_at`` timestamp
        id_factory: Source of transaction ids

    Returns:
        ImportResult with transactions, errors and missing category names
    """
    clock = clock or _default_clock
    id_factory = id_factory or _default_id

    category_index = {c.name.strip().lower(): c.id for c in categories}

    transactions = []
    errors = []
    missing = []
    seen_missing = set()

    for row_num, row in enumerate(table.rows, start=2):
        try:
            raw_date = mapping.value(row, LogicalField.DATE)
            raw_amount = mapping.value(row, LogicalField.AMOUNT)
            raw_category = mapping.value(row, LogicalField.CATEGORY)
            raw_type = (mapping.value(row, LogicalField.TYPE).strip() or "expense").lower()
            raw_description = mapping.value(row, LogicalField.DESCRIPTION).strip()
            raw_notes = mapping.value(row, LogicalField.NOTES).strip()
            raw_tags = mapping.value(row, LogicalField.TAGS)

            try:
                txn_date = parse_smart_date(raw_date)
            except ValueError:
                errors.append(f'Row {row_num}: Invalid date "{raw_date}"')
                continue

            try:
                amount = parse_amount(raw_amount)
            except ValueError:
                errors.append(f'Row {row_num}: Invalid amount "{raw_amount}"')
                continue

            category_name = raw_category.strip()
            category_id = category_index.get(category_name.lower())
            if category_id is None:
                category_id = missing_category_id(category_name)
                if category_id not in seen_missing:
                    seen_missing.add(category_id)
                    missing.append(category_name)

            transactions.append(
                Transaction(
                    id=id_factory(),
                    date=txn_date,
                    amount=amount,
                    category_id=category_id,
                    type=TransactionType.INCOME if raw_type == "income" else TransactionType.EXPENSE,
                    description=raw_description or DEFAULT_DESCRIPTION,
                    created_at=clock(),
                    notes=raw_notes or None,
                    tags=_split_tags(raw_tags),
                )
            )
        except Exception as e:
            errors.append(f"Row {row_num}: {str(e) or 'Unexpected import error'}")

    return ImportResult(
        transactions=tuple(transactions),
        errors=tuple(errors),
        missing_categories=tuple(missing),
    )


class CSVImportService:
    """Service for importing CSV files."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)
        self.category_service = CategoryService(db)

    def read_table(self, csv_file_path: str) -> ParsedTable:
        """Read and tokenize a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
        return parse_csv(csv_path.read_text(encoding="utf-8-sig"))

    def preview(self, csv_file_path: str) -> tuple[ParsedTable, ColumnMapping]:
        """Return the parsed table and a suggested mapping for its headers."""
        table = self.read_table(csv_file_path)
        return table, suggest_mapping(table.headers)

    def import_csv(
        self,
        csv_file_path: str,
        mapping: Optional[ColumnMapping] = None,
        create_missing_categories: bool = True,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Import transactions from a CSV file.

        Args:
            csv_file_path: Path to CSV file
            mapping: Column mapping; suggested from the headers when omitted
            create_missing_categories: Create categories for unmatched names
                instead of rejecting the import
            dry_run: Map and validate without writing anything

        Returns:
            Dict with import statistics:
            - imported: number of transactions imported
            - errors: list of row error messages (skipped rows)
            - missing_categories: category names with no match
            - created_categories: names of categories created
            - duplicate_headers: header names used by more than one column

        Raises:
            ValidationError: If the mapping is incomplete, no row is valid,
                or categories are missing and may not be created
            FileNotFoundError: If CSV file doesn't exist
        """
        return self.import_table(
            self.read_table(csv_file_path),
            mapping=mapping,
            create_missing_categories=create_missing_categories,
            dry_run=dry_run,
            source=csv_file_path,
        )

    def import_table(
        self,
        table: ParsedTable,
        mapping: Optional[ColumnMapping] = None,
        create_missing_categories: bool = True,
        dry_run: bool = False,
        source: str = "<table>",
    ) -> dict[str, Any]:
        """Import transactions from an already parsed table.

        Takes the same options and returns the same statistics as
        :meth:`import_csv`. ``source`` only labels log messages.
        """
        if mapping is None:
            mapping = suggest_mapping(table.headers)
        validate_mapping(mapping, table.headers)

        duplicates = table.duplicate_headers
        if duplicates:
            logger.warning(
                "Duplicate CSV headers %s: only the rightmost column is read", duplicates
            )

        logger.info("Importing %d rows from %s", len(table.rows), source)
        result = csv_to_transactions(
            table, mapping, self.category_service.list_categories()
        )
        for error in result.errors:
            logger.debug(error)

        if not result.transactions:
            raise ValidationError("No valid transactions found to import")

        missing = list(result.missing_categories)
        if missing and not create_missing_categories:
            raise ValidationError(unmatched_categories(missing))

        created: list[str] = []
        transactions = list(result.transactions)
        if not dry_run:
            if missing:
                new_ids, created = self.category_service.create_missing(missing)
                sentinels = {missing_category_id(name): cat_id for name, cat_id in new_ids.items()}
                transactions = [
                    replace(t, category_id=sentinels[t.category_id])
                    if t.category_id in sentinels
                    else t
                    for t in transactions
                ]
            try:
                self.transaction_service.add_many(transactions)
            except Exception:
                self._discard_categories(created)
                raise
            logger.info(
                "Imported %d transactions, %d rows skipped", len(transactions), result.error_count
            )

        return {
            "imported": len(transactions),
            "errors": list(result.errors),
            "missing_categories": missing,
            "created_categories": created,
            "duplicate_headers": duplicates,
        }

    def _discard_categories(self, names: list[str]) -> None:
        """Delete categories created for an import whose transactions were not saved."""
        for name in names:
            category = self.category_service.get_category_by_name(name)
            if category is not None:
                self.category_service.delete_category(category.id)
                logger.warning("Removed category '%s' after failed import", name)
