"""Shared pytest fixtures for finsight tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from finsight.database.factories import create_sqlite_database
from finsight.domain.category import CategoryService
from finsight.domain.entities import Transaction, TransactionType
from finsight.domain.holdings import HoldingService
from finsight.domain.transaction import TransactionService
from finsight.domain.user import UserService


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

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def holding_service(temp_db):
    """Create a HoldingService with a temporary database."""
    return HoldingService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user profile."""
    user_service.create_user("user-1", "Test User", email="test@example.com")
    return user_service.get_user("user-1")


@pytest.fixture
def sample_categories(category_service):
    """Create income and expense categories and return their IDs by name."""
    return {
        "Salary": category_service.create_category("Salary", category_type="income"),
        "Food": category_service.create_category("Food", category_type="expense"),
        "Transport": category_service.create_category("Transport", category_type="expense"),
    }


@pytest.fixture
def make_txn():
    """Build in-memory Transaction entities for pure aggregation tests."""
    counter = {"id": 0}

    def _make(
        amount,
        txn_type=TransactionType.EXPENSE,
        category=None,
        description=None,
        on=date(2024, 1, 15),
    ) -> Transaction:
        counter["id"] += 1
        return Transaction(
            id=counter["id"],
            user_id="user-1",
            category_id=None,
            category_name=category,
            type=txn_type,
            amount=Decimal(str(amount)),
            description=description,
            date=on,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
