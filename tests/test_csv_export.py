"""Tests for CSV serializers."""

from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from fintrack.domain.csv_export import (
    categories_to_csv,
    combined_export,
    export_filename,
    format_amount,
    transactions_to_csv,
    write_export,
)
from fintrack.domain.csv_format import ColumnMapping
from fintrack.domain.csv_import import csv_to_transactions
from fintrack.domain.entities import Category, TransactionType
from fintrack.utils.csv_parser import parse_csv

CATEGORIES = [
    Category(id="cat_1", name="Salary", type=TransactionType.INCOME, color="#10b981", icon="DollarSign"),
    Category(id="cat_2", name="Groceries", type=TransactionType.EXPENSE, color="#f59e0b"),
]

IDENTITY_MAPPING = ColumnMapping(
    date="Date",
    amount="Amount",
    category="Category",
    type="Type",
    description="Description",
    notes="Notes",
    tags="Tags",
)


def test_transactions_to_csv_exact_output(make_transaction):
    transactions = [
        make_transaction(
            description='Weekly "big" shop',
            amount=Decimal("1500"),
            tags=("food", "weekly"),
        ),
        make_transaction(
            date=datetime(2024, 1, 31, tzinfo=UTC),
            type=TransactionType.INCOME,
            category_id="cat_1",
            amount=Decimal("1234.50"),
            description="Pay",
            notes='said "thanks"',
        ),
    ]

    assert transactions_to_csv(transactions, CATEGORIES) == (
        "Date,Type,Category,Amount,Description,Notes,Tags\n"
        '2024-01-05,expense,Groceries,1500,"Weekly ""big"" shop",,food;weekly\n'
        '2024-01-31,income,Salary,1234.5,"Pay","said ""thanks""",'
    )


def test_transactions_to_csv_empty():
    assert transactions_to_csv([], CATEGORIES) == "Date,Type,Category,Amount,Description,Notes,Tags"


def test_unknown_and_placeholder_categories(make_transaction):
    transactions = [
        make_transaction(category_id="gone"),
        make_transaction(category_id="missing:pets"),
    ]
    lines = transactions_to_csv(transactions, CATEGORIES).split("\n")
    assert lines[1].split(",")[2] == "Unknown"
    assert lines[2].split(",")[2] == "Unknown"


def test_category_with_comma_is_quoted(make_transaction):
    categories = [Category(id="c", name="Food, Drinks", type=TransactionType.EXPENSE, color="#000")]
    line = transactions_to_csv([make_transaction(category_id="c")], categories).split("\n")[1]
    assert line == '2024-01-05,expense,"Food, Drinks",10,"Test",,'


def test_date_rendered_in_utc(make_transaction):
    late_evening = datetime(2024, 1, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    line = transactions_to_csv([make_transaction(date=late_evening)], CATEGORIES).split("\n")[1]
    assert line.startswith("2024-01-06,")


def test_naive_date_taken_as_utc(make_transaction):
    naive = datetime(2024, 1, 5, 23, 30)
    line = transactions_to_csv([make_transaction(date=naive)], CATEGORIES).split("\n")[1]
    assert line.startswith("2024-01-05,")


@pytest.mark.parametrize(
    "amount, expected",
    [("1500", "1500"), ("1500.00", "1500"), ("1234.50", "1234.5"), ("0.25", "0.25"), ("0", "0")],
)
def test_format_amount(amount, expected):
    assert format_amount(Decimal(amount)) == expected


def test_categories_to_csv():
    categories = [
        Category(id="c1", name="Food, Drinks", type=TransactionType.EXPENSE, color="#fff", icon="Tag"),
        Category(id="c2", name="Salary", type=TransactionType.INCOME, color="#10b981"),
    ]
    assert categories_to_csv(categories) == (
        "Name,Type,Color,Icon\n"
        '"Food, Drinks",expense,#fff,Tag\n'
        "Salary,income,#10b981,"
    )


def test_combined_export(make_transaction):
    content = combined_export([make_transaction()], CATEGORIES)
    transactions_part, categories_part = content.split("\n\n---CATEGORIES---\n")
    assert transactions_part == transactions_to_csv([make_transaction()], CATEGORIES)
    assert categories_part == categories_to_csv(CATEGORIES)


def test_export_filenames():
    on = date(2024, 3, 5)
    assert export_filename("transactions", on) == "transactions_2024-03-05.csv"
    assert export_filename("categories", on) == "categories_2024-03-05.csv"
    assert export_filename("both", on) == "fintrack_export_2024-03-05.csv"
    with pytest.raises(ValueError):
        export_filename("budgets", on)


def test_write_export_keeps_content(tmp_path):
    content = "Date,Type\n2024-01-05,expense"
    path = write_export(tmp_path / "out.csv", content)
    with open(path, encoding="utf-8", newline="") as f:
        assert f.read() == content


def test_round_trip(make_transaction):
    """Exported transactions import back with the same values."""
    originals = [
        make_transaction(amount=Decimal("1500"), description="Weekly shop"),
        make_transaction(
            date=datetime(2023, 12, 31, tzinfo=UTC),
            type=TransactionType.INCOME,
            category_id="cat_1",
            amount=Decimal("1234.56"),
            description='Pay, "December"',
            notes="bonus, included",
            tags=("work", "monthly"),
        ),
        make_transaction(amount=Decimal("0.5"), description="Gum"),
    ]

    text = transactions_to_csv(originals, CATEGORIES)
    result = csv_to_transactions(parse_csv(text), IDENTITY_MAPPING, CATEGORIES)

    assert result.errors == ()
    assert result.missing_categories == ()

    def key(t):
        return (t.date, t.amount, t.type, t.description)

    assert [key(t) for t in result.transactions] == [key(t) for t in originals]
    assert [t.category_id for t in result.transactions] == [t.category_id for t in originals]
    assert result.transactions[1].notes == "bonus, included"
    assert result.transactions[1].tags == ("work", "monthly")
