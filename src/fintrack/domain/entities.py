"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. Storage backends convert their own records into these
entities before handing them to the services.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kinds of tracked accounts."""

    BANK = "bank"
    WALLET = "wallet"
    CASH = "cash"
    CREDIT_CARD = "credit_card"

    @property
    def is_credit(self) -> bool:
        """True when the balance is an amount owed rather than funds held."""
        return self is AccountType.CREDIT_CARD


@dataclass(frozen=True)
class Account:
    """Account domain entity.

    For credit cards ``balance`` is the amount owed; for every other type it
    is the funds held.
    """

    id: int
    user_id: str
    name: str
    type: AccountType
    balance: Decimal
    created_at: datetime
    institution: Optional[str] = None
    last4: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    user_id: str
    amount: Decimal
    description: str
    category: str
    date: date
    created_at: datetime
    account_id: Optional[int] = None


@dataclass(frozen=True)
class Income:
    """Income domain entity.

    Income is recorded for reporting only and is not linked to an account.
    """

    id: int
    user_id: str
    amount: Decimal
    description: str
    category: str
    date: date
    created_at: datetime
    invoice_number: Optional[str] = None


@dataclass(frozen=True)
class TransferResult:
    """Balances of both accounts after a transfer."""

    from_balance: Decimal
    to_balance: Decimal


@dataclass(frozen=True)
class Summary:
    """Aggregated view of a user's income, expenses and account balances."""

    total_expenses: Decimal
    expense_count: int
    total_funds: Decimal
    total_owed: Decimal
    total_income: Decimal = Decimal("0.00")
    accounts: list[Account] = field(default_factory=list)

    @property
    def net_balance(self) -> Decimal:
        """Income minus expenses."""
        return self.total_income - self.total_expenses

    @property
    def net_position(self) -> Decimal:
        """Funds held minus amounts owed on credit cards."""
        return self.total_funds - self.total_owed
