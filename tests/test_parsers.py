"""Tests for amount, date and account parsing utilities."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from fintrack.domain.errors import AccountNotFoundError
from fintrack.utils.account_resolver import resolve_account
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import parse_date


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("123.45", "123.45"),
            ("$1,234.5", "1234.50"),
            ("₹ 300", "300.00"),
            ("-12", "-12.00"),
            ("(50.00)", "-50.00"),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_amount(text) == Decimal(expected)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "inf", "1e30"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)


class TestParseDate:
    """Tests for parse_date."""

    def test_relative(self):
        assert parse_date("today") == date.today()
        assert parse_date("Yesterday") == date.today() - timedelta(days=1)

    def test_absolute(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestResolveAccount:
    """Tests for resolve_account."""

    def test_by_name_and_id(self, account_service, user_id, checking):
        assert resolve_account(account_service, user_id, "Checking") == checking.id
        assert resolve_account(account_service, user_id, str(checking.id)) == checking.id
        assert resolve_account(account_service, user_id, checking.id) == checking.id

    def test_unknown(self, account_service, user_id, checking):
        with pytest.raises(AccountNotFoundError):
            resolve_account(account_service, user_id, "Nope")
        with pytest.raises(AccountNotFoundError):
            resolve_account(account_service, "bob", checking.id)
