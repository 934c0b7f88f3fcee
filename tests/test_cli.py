"""Tests for the command line interface."""

import pytest
from decimal import Decimal

from fintrack.cli.error_handling import error_hint
from fintrack.cli.main import cli
from fintrack.domain.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    OverPaymentError,
    UnsupportedOperationError,
)


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database as user alice."""

    def _invoke(*args, input=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--user", "alice", *args],
            input=input,
        )

    return _invoke


def test_help_does_not_open_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "expense" in result.output
    assert "income" in result.output
    assert "transfer" in result.output


class TestAccountCommands:
    """Tests for account commands."""

    def test_create_and_list(self, invoke):
        result = invoke("account", "create", "Checking", "--balance", "1000", "--institution", "Chase")
        assert result.exit_code == 0
        assert "Created account 'Checking'" in result.output
        assert "Balance: 1,000.00" in result.output

        result = invoke("account", "create", "Visa", "--type", "credit_card", "--last4", "4242")
        assert result.exit_code == 0

        result = invoke("account", "list")
        assert result.exit_code == 0
        assert "Checking" in result.output
        assert "Owed:" in result.output
        assert "****4242" in result.output

    def test_list_empty(self, invoke):
        result = invoke("account", "list")
        assert result.exit_code == 0
        assert "No accounts found" in result.output

    def test_create_duplicate(self, invoke):
        invoke("account", "create", "Checking")
        result = invoke("account", "create", "Checking")
        assert result.exit_code == 1
        assert "already exists" in result.output.lower()

    def test_rename(self, invoke, checking):
        result = invoke("account", "rename", "Checking", "Main")
        assert result.exit_code == 0
        assert "Renamed account to 'Main'" in result.output

    def test_delete_with_confirmation(self, invoke, checking):
        result = invoke("account", "delete", "Checking", input="y\n")
        assert result.exit_code == 0
        assert "Deleted account 'Checking'" in result.output

    def test_delete_cancelled(self, invoke, checking):
        result = invoke("account", "delete", "Checking", input="n\n")
        assert result.exit_code == 0
        assert "Deletion cancelled" in result.output

    def test_unknown_account(self, invoke):
        result = invoke("account", "rename", "Nope", "Other")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestExpenseCommands:
    """Tests for expense commands."""

    def test_add_update_delete(self, invoke, checking):
        result = invoke(
            "expense", "add", "--amount", "300", "--description", "Rent",
            "--category", "Housing", "--account", "Checking", "--date", "2024-01-15",
        )
        assert result.exit_code == 0
        assert "Created expense" in result.output
        assert "Checking balance: 700.00" in result.output

        result = invoke("expense", "list")
        assert result.exit_code == 0
        assert "Rent" in result.output
        assert "2024-01-15" in result.output

        result = invoke("expense", "update", "1", "--amount", "450")
        assert result.exit_code == 0
        assert "Checking balance: 550.00" in result.output

        result = invoke("expense", "delete", "1")
        assert result.exit_code == 0
        assert "Deleted expense 1" in result.output

    def test_add_insufficient_funds(self, invoke, checking):
        result = invoke(
            "expense", "add", "--amount", "2000", "--description", "TV",
            "--category", "Electronics", "--account", "Checking",
        )
        assert result.exit_code == 1
        assert "Insufficient balance" in result.output
        assert "Hint: Transfer money into the account first" in result.output

    def test_add_invalid_amount(self, invoke):
        result = invoke("expense", "add", "--amount", "abc", "--description", "x", "--category", "y")
        assert result.exit_code == 1
        assert "Invalid amount" in result.output

    def test_add_amount_too_large(self, invoke):
        result = invoke("expense", "add", "--amount", "1e30", "--description", "d", "--category", "c")
        assert result.exit_code == 1
        assert "Error: Invalid amount" in result.output
        assert "must not exceed" in result.output

    def test_add_amount_above_single_expense_limit(self, invoke):
        result = invoke(
            "expense", "add", "--amount", "100000000", "--description", "d", "--category", "c"
        )
        assert result.exit_code == 1
        assert "Error: Amount must not exceed 99,999,999.99" in result.output

    def test_update_account_conflict(self, invoke, checking):
        result = invoke("expense", "update", "1", "--account", "Checking", "--no-account")
        assert result.exit_code == 1

    def test_delete_missing(self, invoke):
        result = invoke("expense", "delete", "42")
        assert result.exit_code == 1
        assert "Expense 42 not found" in result.output

    def test_list_empty(self, invoke):
        result = invoke("expense", "list")
        assert result.exit_code == 0
        assert "No expenses found" in result.output


class TestIncomeCommands:
    """Tests for income commands."""

    def test_add_list_update_delete(self, invoke, checking):
        result = invoke(
            "income", "add", "--amount", "2,500", "--description", "Salary",
            "--category", "Salary", "--date", "2024-03-01", "--invoice", "INV-7",
        )
        assert result.exit_code == 0
        assert "Recorded income 1" in result.output
        assert "Amount: 2,500.00" in result.output
        assert "Invoice: INV-7" in result.output

        result = invoke("income", "list")
        assert result.exit_code == 0
        assert "2024-03-01" in result.output
        assert "INV-7" in result.output

        result = invoke("income", "update", "1", "--amount", "2600")
        assert result.exit_code == 0
        assert "Amount: 2,600.00" in result.output

        result = invoke("account", "list")
        assert "1,000.00" in result.output

        result = invoke("income", "delete", "1")
        assert result.exit_code == 0
        assert "Deleted income 1" in result.output

    def test_update_missing(self, invoke):
        result = invoke("income", "update", "9", "--amount", "1")
        assert result.exit_code == 1
        assert "Income 9 not found" in result.output

    def test_delete_missing(self, invoke):
        result = invoke("income", "delete", "9")
        assert result.exit_code == 1
        assert "Income 9 not found" in result.output

    def test_list_empty(self, invoke):
        result = invoke("income", "list")
        assert result.exit_code == 0
        assert "No income found" in result.output

    def test_memory_backend(self, cli_runner):
        result = cli_runner.invoke(
            cli,
            ["--database-url", "memory://", "income", "add", "--amount", "5",
             "--description", "Gift", "--category", "Other"],
        )
        assert result.exit_code == 0
        assert "Recorded income 1" in result.output


class TestTransferCommand:
    """Tests for the transfer command."""

    def test_pay_credit_card(self, invoke, checking, visa, expense_service, user_id):
        expense_service.create_expense(
            user_id=user_id, amount=Decimal("500"), description="TV", category="Electronics",
            account_id=visa.id,
        )
        result = invoke("transfer", "Checking", "Visa", "500")
        assert result.exit_code == 0
        assert "Checking: 500.00" in result.output
        assert "Visa: 0.00" in result.output

        result = invoke("transfer", "Checking", "Visa", "100")
        assert result.exit_code == 1
        assert "exceeds credit card owed" in result.output
        assert "Hint: Run 'fintrack account list'" in result.output

    def test_same_account(self, invoke, checking):
        result = invoke("transfer", "Checking", "Checking", "1")
        assert result.exit_code == 1
        assert "must differ" in result.output


class TestSummaryCommand:
    """Tests for the summary command."""

    def test_summary(self, invoke, checking, visa):
        result = invoke("summary")
        assert result.exit_code == 0
        assert "Funds held:" in result.output
        assert "Income:" in result.output
        assert "Net balance:" in result.output
        assert "1,000.00" in result.output
        assert "Visa" in result.output

    def test_summary_memory_backend(self, cli_runner):
        result = cli_runner.invoke(cli, ["--database-url", "memory://", "summary"])
        assert result.exit_code == 0
        assert "0 recorded" in result.output

    def test_memory_backend_rejects_accounts(self, cli_runner):
        result = cli_runner.invoke(cli, ["--database-url", "memory://", "account", "list"])
        assert result.exit_code == 1
        assert "not supported" in result.output
        assert "--db-path or --database-url" in result.output


@pytest.mark.parametrize(
    "error,expected",
    [
        (InsufficientFundsError("x"), "Transfer money"),
        (OverPaymentError("x"), "what the card owes"),
        (UnsupportedOperationError("x"), "SQL database"),
        (AccountNotFoundError("x"), None),
        (ValueError("x"), None),
    ],
)
def test_error_hint(error, expected):
    hint = error_hint(error)
    if expected is None:
        assert hint is None
    else:
        assert expected in hint
