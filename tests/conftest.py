"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Transaction, TransactionType
from fintrack.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sample_categories(category_service):
    """Create Groceries and Salary categories and return their IDs by name."""
    return {
        "Groceries": category_service.create_category(
            name="Groceries", category_type="expense", color="#f59e0b", icon="ShoppingCart"
        ),
        "Salary": category_service.create_category(
            name="Salary", category_type="income", color="#10b981", icon="DollarSign"
        ),
    }


@pytest.fixture
def make_transaction():
    """Build Transaction entities with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides):
        values = {
            "id": f"txn_{next(counter)}",
            "date": datetime(2024, 1, 5, tzinfo=UTC),
            "amount": Decimal("10"),
            "category_id": "cat_2",
            "type": TransactionType.EXPENSE,
            "description": "Test",
            "created_at": datetime(2024, 2, 1, 12, 0, tzinfo=UTC),
        }
        values.update(overrides)
        return Transaction(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
