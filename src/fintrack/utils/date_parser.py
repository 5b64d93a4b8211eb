"""Date parsing utilities."""

import re
from datetime import UTC, date, datetime, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_YEAR_FIRST = re.compile(r"(\d{4})[-/](\d{2})[-/](\d{2})")
_DAY_FIRST = re.compile(r"(\d{2})[-/](\d{2})[-/](\d{4})")
_DOTTED = re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{4})")
_ISO_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}.*")
_MONTH_FIRST = re.compile(r"([A-Za-z]{3,9})\.?\s+(\d{1,2}),?\s+(\d{4})")
_DAY_MONTH = re.compile(r"(\d{1,2})\s+([A-Za-z]{3,9})\.?,?\s+(\d{4})")

# English month tables, independent of the process locale
_MONTH_NAMES = date_parser.parserinfo()


def _utc_midnight(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=UTC)


def _from_month_name(name: str, day: str, year: str) -> datetime:
    month = _MONTH_NAMES.month(name)
    if month is None:
        raise ValueError(f"Unknown month '{name}'")
    return _utc_midnight(int(year), month, int(day))


def _parse_iso_datetime(value: str) -> datetime:
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


# Extra formats accepted after the two strict numeric layouts, in order
_EXTRA_FORMATS = [
    (_ISO_DATETIME, lambda m: _parse_iso_datetime(m.group(0))),
    (_DOTTED, lambda m: _utc_midnight(int(m.group(3)), int(m.group(2)), int(m.group(1)))),
    (_MONTH_FIRST, lambda m: _from_month_name(m.group(1), m.group(2), m.group(3))),
    (_DAY_MONTH, lambda m: _from_month_name(m.group(2), m.group(1), m.group(3))),
]


def parse_smart_date(value: str) -> datetime:
    """Parse a date cell from an imported CSV file.

    Formats are tried in priority order, first match wins:

    1. ``YYYY-MM-DD`` or ``YYYY/MM/DD``
    2. ``DD-MM-YYYY`` or ``DD/MM/YYYY``
    3. ISO-8601 date-time (``2024-03-05T10:30:00Z``)
    4. ``DD.MM.YYYY``
    5. ``Mar 5, 2024`` / ``March 05 2024``
    6. ``5 Mar 2024`` / ``05 March 2024``

    A string matching a layout but naming an impossible date (month 13,
    February 30) is rejected rather than passed to the next format.

    Args:
        value: Raw cell text

    Returns:
        Timezone-aware datetime in UTC; midnight for date-only inputs

    Raises:
        ValueError: If the value matches none of the accepted formats
    """
    v = (value or "").strip()
    if not v:
        raise ValueError("Empty date string")

    try:
        match = _YEAR_FIRST.fullmatch(v)
        if match:
            year, month, day = match.groups()
            return _utc_midnight(int(year), int(month), int(day))

        match = _DAY_FIRST.fullmatch(v)
        if match:
            day, month, year = match.groups()
            return _utc_midnight(int(year), int(month), int(day))

        for pattern, build in _EXTRA_FORMATS:
            match = pattern.fullmatch(v)
            if match:
                return build(match)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{v}': {e}") from e

    raise ValueError(f"Could not parse date '{v}': unrecognized format")


def parse_date(date_str: str) -> date:
    """Parse a date filter given on the command line.

    Supports relative dates ("today", "yesterday", "this month",
    "last month", "this year", "last year") and any absolute date that
    dateutil understands.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
