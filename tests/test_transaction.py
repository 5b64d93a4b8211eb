"""Tests for transaction service and commands."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from fintrack.cli.main import cli
from fintrack.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def groceries_txn(transaction_service, sample_categories):
    return transaction_service.create_transaction(
        date=datetime(2024, 1, 5, tzinfo=UTC),
        amount=Decimal("42.50"),
        category_id=sample_categories["Groceries"],
        description="Market",
    )


def test_create_transaction_unknown_category(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            date=datetime(2024, 1, 5, tzinfo=UTC), amount=Decimal("1"), category_id="nope"
        )


def test_create_transaction_negative_amount(transaction_service, sample_categories):
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            date=datetime(2024, 1, 5, tzinfo=UTC),
            amount=Decimal("-1"),
            category_id=sample_categories["Groceries"],
        )


def test_add_many_rejects_placeholder_categories(transaction_service, make_transaction):
    with pytest.raises(ValidationError) as excinfo:
        transaction_service.add_many([make_transaction(category_id="missing:pets")])
    assert "missing:pets" in str(excinfo.value)


def test_update_transaction(transaction_service, sample_categories, groceries_txn):
    transaction_service.update_transaction(
        groceries_txn, category_id=sample_categories["Salary"], type="income"
    )

    txn = transaction_service.get_transaction(groceries_txn)
    assert txn.category_id == sample_categories["Salary"]
    assert txn.type.value == "income"


def test_update_transaction_unknown_category(transaction_service, groceries_txn):
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction(groceries_txn, category_id="nope")


def test_transaction_list(cli_runner, temp_db, groceries_txn):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "transaction", "list"])

    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "2024-01-05" in result.output
    assert "-42.5" in result.output
    assert "Groceries" in result.output


def test_transaction_list_filters(cli_runner, temp_db, groceries_txn):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "transaction",
            "list",
            "--start-date",
            "2024-02-01",
        ],
    )

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_transaction_list_unknown_category(cli_runner, temp_db, groceries_txn):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "transaction", "list", "--category", "Pets"],
    )

    assert result.exit_code == 1
    assert "Category 'Pets' not found" in result.output


def test_transaction_delete(cli_runner, temp_db, groceries_txn, transaction_service):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "transaction", "delete", groceries_txn]
    )

    assert result.exit_code == 0
    assert transaction_service.get_transaction(groceries_txn) is None
