"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from fintrack.utils.amount_parser import parse_amount


def test_plain_amount():
    assert parse_amount("1500") == Decimal("1500")


def test_thousands_separators_removed():
    """Commas are thousands separators."""
    assert parse_amount("1,234.50") == Decimal("1234.5")


def test_whitespace_trimmed():
    assert parse_amount("  42.10 ") == Decimal("42.10")


def test_sign_dropped():
    """Amounts are stored unsigned; type carries direction."""
    assert parse_amount("-50.25") == Decimal("50.25")


@pytest.mark.parametrize("value", ["", "   ", "abc", "12abc", "NaN", "Infinity", "$"])
def test_invalid_amounts(value):
    with pytest.raises(ValueError):
        parse_amount(value)
