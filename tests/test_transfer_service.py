"""Tests for TransferService."""

import pytest
from decimal import Decimal

from fintrack.domain.entities import TransferResult
from fintrack.domain.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    OverPaymentError,
    SourceDestinationEqualError,
)


def test_transfer_between_bank_accounts(transfer_service, user_id, checking, savings, balance_of):
    """Test a plain transfer moves funds."""
    result = transfer_service.transfer(user_id, checking.id, savings.id, Decimal("250.00"))

    assert result == TransferResult(from_balance=Decimal("750.00"), to_balance=Decimal("450.00"))
    assert balance_of(checking) == Decimal("750.00")
    assert balance_of(savings) == Decimal("450.00")


def test_transfer_round_trip(transfer_service, user_id, checking, savings, balance_of):
    """Test transferring there and back restores both balances."""
    transfer_service.transfer(user_id, checking.id, savings.id, Decimal("123.45"))
    transfer_service.transfer(user_id, savings.id, checking.id, Decimal("123.45"))

    assert balance_of(checking) == Decimal("1000.00")
    assert balance_of(savings) == Decimal("200.00")


def test_transfer_insufficient_funds(transfer_service, user_id, checking, savings, balance_of):
    """Test an overdrawing transfer changes nothing."""
    with pytest.raises(InsufficientFundsError):
        transfer_service.transfer(user_id, savings.id, checking.id, Decimal("200.01"))

    assert balance_of(checking) == Decimal("1000.00")
    assert balance_of(savings) == Decimal("200.00")


def test_cash_advance_from_credit_card(transfer_service, user_id, checking, visa, balance_of):
    """Test drawing from a card increases what it owes."""
    result = transfer_service.transfer(user_id, visa.id, checking.id, Decimal("50.00"))

    assert result.from_balance == Decimal("50.00")
    assert result.to_balance == Decimal("1050.00")
    assert balance_of(visa) == Decimal("50.00")


def test_credit_card_payment_scenario(
    transfer_service, expense_service, user_id, checking, visa, balance_of
):
    """Test spending on a card, paying it off, then over-paying."""
    expense_service.create_expense(
        user_id=user_id, amount=Decimal("500.00"), description="TV", category="Electronics",
        account_id=visa.id,
    )
    assert balance_of(visa) == Decimal("500.00")

    transfer_service.transfer(user_id, checking.id, visa.id, Decimal("500.00"))
    assert balance_of(visa) == Decimal("0.00")
    assert balance_of(checking) == Decimal("500.00")

    with pytest.raises(OverPaymentError):
        transfer_service.transfer(user_id, checking.id, visa.id, Decimal("100.00"))

    assert balance_of(visa) == Decimal("0.00")
    assert balance_of(checking) == Decimal("500.00")


@pytest.mark.parametrize("amount", ["0", "-1.00"])
def test_transfer_invalid_amount(transfer_service, user_id, checking, savings, amount):
    """Test non-positive amounts are rejected."""
    with pytest.raises(InvalidAmountError):
        transfer_service.transfer(user_id, checking.id, savings.id, Decimal(amount))


def test_transfer_same_account(transfer_service, user_id, checking):
    """Test source and destination must differ."""
    with pytest.raises(SourceDestinationEqualError):
        transfer_service.transfer(user_id, checking.id, checking.id, Decimal("1.00"))


def test_transfer_unknown_account(transfer_service, user_id, checking, balance_of):
    """Test a missing destination leaves the source unchanged."""
    with pytest.raises(AccountNotFoundError):
        transfer_service.transfer(user_id, checking.id, 999, Decimal("1.00"))
    assert balance_of(checking) == Decimal("1000.00")


def test_transfer_other_users_account(transfer_service, checking, savings):
    """Test accounts of another user cannot be used."""
    with pytest.raises(AccountNotFoundError):
        transfer_service.transfer("mallory", checking.id, savings.id, Decimal("1.00"))


def test_transfer_locks_in_ascending_id_order(transfer_service, user_id, checking, savings, lock_log):
    """Test both directions lock the lower account ID first."""
    low, high = sorted((checking, savings), key=lambda acc: acc.id)

    transfer_service.transfer(user_id, high.id, low.id, Decimal("5.00"))
    transfer_service.transfer(user_id, low.id, high.id, Decimal("5.00"))

    assert lock_log == [low.id, high.id, low.id, high.id]
