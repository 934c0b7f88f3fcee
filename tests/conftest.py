"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from decimal import Decimal
import pytest
import structlog

from fintrack.database.factories import create_sqlite_database
from fintrack.database.memory import MemoryDatabase
from fintrack.domain.account import AccountService
from fintrack.domain.expense import ExpenseService
from fintrack.domain.income import IncomeService
from fintrack.domain.summary import SummaryService
from fintrack.domain.transfer import TransferService

USER = "alice"


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
def memory_db():
    """Create an in-memory database."""
    return MemoryDatabase()


@pytest.fixture
def user_id():
    """Return the user owning the sample data."""
    return USER


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def income_service(temp_db):
    """Create an IncomeService with a temporary database."""
    return IncomeService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def checking(account_service, user_id):
    """Bank account 'Checking' holding 1000.00."""
    account_id = account_service.create_account(
        user_id=user_id, name="Checking", type="bank", balance=Decimal("1000.00")
    )
    return account_service.get_account(account_id, user_id)


@pytest.fixture
def savings(account_service, user_id):
    """Bank account 'Savings' holding 200.00."""
    account_id = account_service.create_account(
        user_id=user_id, name="Savings", type="bank", balance=Decimal("200.00")
    )
    return account_service.get_account(account_id, user_id)


@pytest.fixture
def visa(account_service, user_id):
    """Credit card 'Visa' owing 0.00."""
    account_id = account_service.create_account(
        user_id=user_id, name="Visa", type="credit_card", balance=Decimal("0.00"), last4="4242"
    )
    return account_service.get_account(account_id, user_id)


@pytest.fixture
def balance_of(account_service, user_id):
    """Return a function reading an account's current balance."""

    def _balance(account):
        return account_service.get_account(account.id, user_id).balance

    return _balance


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration made by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def lock_log(temp_db, monkeypatch):
    """Record the account IDs locked through get_account(for_update=True), in order."""
    locked = []
    get_account = temp_db.get_account

    def recording_get_account(account_id, user_id=None, for_update=False):
        if for_update:
            locked.append(account_id)
        return get_account(account_id, user_id=user_id, for_update=for_update)

    monkeypatch.setattr(temp_db, "get_account", recording_get_account)
    return locked
