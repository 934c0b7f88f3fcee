"""Balance mutation rule.

Every change to an account balance goes through :func:`apply_amount`. The
function is pure: it returns the balance the account would have and never
touches storage, so callers can validate every leg of an operation before
writing any of them.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from enum import Enum
from typing import Optional, Union

from fintrack.domain.entities import Account
from fintrack.domain.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    OverPaymentError,
    amount_out_of_range,
    insufficient_funds,
    non_positive_amount,
    over_payment,
)

CENT = Decimal("0.01")
# Largest values the balance and amount columns can hold (Numeric(12,2) and Numeric(10,2))
MAX_BALANCE = Decimal("9999999999.99")
MAX_AMOUNT = Decimal("99999999.99")


class Direction(str, Enum):
    """Economic direction of a balance change."""

    SPEND = "spend"
    RECEIVE = "receive"

    @property
    def inverse(self) -> "Direction":
        return Direction.RECEIVE if self is Direction.SPEND else Direction.SPEND


def to_money(value: Union[Decimal, str, int]) -> Decimal:
    """Quantize a value to two fractional digits.

    Raises:
        InvalidAmountError: If the value is not a finite number or lies outside
            the range a stored balance can hold
    """
    if isinstance(value, float):
        raise InvalidAmountError("Monetary values must not be floats")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    # quantize raises InvalidOperation past 28 significant digits
    if abs(amount) > MAX_BALANCE:
        raise InvalidAmountError(amount_out_of_range(MAX_BALANCE))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def require_positive(amount: Union[Decimal, str, int]) -> Decimal:
    """Return the amount as money, raising if it is not strictly positive."""
    money = to_money(amount)
    if money <= 0:
        raise InvalidAmountError(non_positive_amount(money))
    if money > MAX_AMOUNT:
        raise InvalidAmountError(amount_out_of_range(MAX_AMOUNT))
    return money


def apply_amount(
    account: Account,
    amount: Decimal,
    direction: Direction,
    balance: Optional[Decimal] = None,
) -> Decimal:
    """Compute an account's balance after spending or receiving an amount.

    Non-credit accounts hold funds: spending lowers the balance and receiving
    raises it. Credit cards track the amount owed, so the signs are inverted:
    spending raises what is owed and a payment lowers it.

    Args:
        account: Account being changed
        amount: Positive amount
        direction: SPEND or RECEIVE
        balance: Balance to start from instead of ``account.balance``, used to
            chain virtual steps such as revert-then-reapply

    Returns:
        New balance, quantized to cents

    Raises:
        InvalidAmountError: If amount is not positive or too large to store
        InsufficientFundsError: If a non-credit balance would go negative
        OverPaymentError: If a credit card's owed amount would go negative
    """
    amount = require_positive(amount)
    current = to_money(account.balance if balance is None else balance)

    if account.type.is_credit:
        if direction is Direction.SPEND:
            return to_money(current + amount)
        new_balance = current - amount
        if new_balance < 0:
            raise OverPaymentError(over_payment(account.name, current, amount))
        return new_balance

    if direction is Direction.RECEIVE:
        return to_money(current + amount)
    new_balance = current - amount
    if new_balance < 0:
        raise InsufficientFundsError(insufficient_funds(account.name, current, amount))
    return new_balance


def revert_amount(
    account: Account,
    amount: Decimal,
    direction: Direction = Direction.SPEND,
    balance: Optional[Decimal] = None,
) -> Decimal:
    """Compute the balance with a previously applied amount undone."""
    return apply_amount(account, amount, direction.inverse, balance=balance)
