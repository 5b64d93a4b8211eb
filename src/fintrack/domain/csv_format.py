"""Column mapping between CSV headers and transaction fields."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Mapping, Optional, Sequence

from fintrack.domain.errors import ValidationError, missing_required_columns


class LogicalField(str, Enum):
    """Transaction fields a CSV column can be mapped to."""

    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"
    TYPE = "type"
    DESCRIPTION = "description"
    NOTES = "notes"
    TAGS = "tags"


REQUIRED_FIELDS = (
    LogicalField.DATE,
    LogicalField.AMOUNT,
    LogicalField.CATEGORY,
    LogicalField.TYPE,
    LogicalField.DESCRIPTION,
)
OPTIONAL_FIELDS = (LogicalField.NOTES, LogicalField.TAGS)


@dataclass(frozen=True)
class ColumnMapping:
    """Header name assigned to each logical field, or None to skip it."""

    date: Optional[str] = None
    amount: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[str] = None

    def column_for(self, field: LogicalField) -> Optional[str]:
        """Return the mapped header for a field; empty strings count as unmapped."""
        return getattr(self, field.value) or None

    def value(self, row: Mapping[str, str], field: LogicalField) -> str:
        """Return the raw cell for a field in one row, or "" when unmapped."""
        column = self.column_for(field)
        if column is None:
            return ""
        return row.get(column, "") or ""

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Optional[str]]) -> "ColumnMapping":
        """Build a mapping from ``{"date": "Posted", ...}``.

        Raises:
            ValidationError: If a key is not a logical field
        """
        valid = {f.value for f in LogicalField}
        unknown = sorted(set(mapping) - valid)
        if unknown:
            raise ValidationError(
                f"Invalid field(s) {', '.join(unknown)}. "
                f"Must be one of: {', '.join(f.value for f in LogicalField)}"
            )
        return cls(**{key: (value or None) for key, value in mapping.items()})


def suggest_mapping(headers: Sequence[str]) -> ColumnMapping:
    """Pre-fill a mapping by matching field names inside header names.

    For each logical field the first header whose lower-cased text contains
    the field name is chosen, e.g. "Transaction Date" for ``date``.
    """
    suggested = {}
    for field in LogicalField:
        for header in headers:
            if field.value in header.lower():
                suggested[field.value] = header
                break
    return ColumnMapping.from_dict(suggested)


def validate_mapping(mapping: ColumnMapping, headers: Sequence[str]) -> None:
    """Check a mapping before rows are mapped.

    Raises:
        ValidationError: If a required field is unmapped or a mapped column
            is not one of the headers
    """
    missing = [f.value for f in REQUIRED_FIELDS if mapping.column_for(f) is None]
    if missing:
        raise ValidationError(missing_required_columns(missing))

    unknown = [
        mapping.column_for(f)
        for f in LogicalField
        if mapping.column_for(f) is not None and mapping.column_for(f) not in headers
    ]
    if unknown:
        raise ValidationError(f"CSV file missing mapped columns: {', '.join(unknown)}")
