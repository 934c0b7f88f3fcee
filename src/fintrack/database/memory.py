"""In-memory database implementation.

Keeps expenses and income in process memory for quick experiments and for
running without a database server. Accounts are not tracked by this backend, so
every account, balance and transfer operation raises
UnsupportedOperationError.
"""

from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Iterator, Optional

from fintrack.database.base import Database
from fintrack.domain.balance import to_money
from fintrack.domain.entities import Account, AccountType, Expense, Income
from fintrack.domain.errors import (
    ExpenseNotFoundError,
    IncomeNotFoundError,
    UnsupportedOperationError,
    expense_not_found,
    income_not_found,
    unsupported_operation,
)


class MemoryDatabase(Database):
    """Expense and income storage held in dictionaries."""

    backend_name = "in-memory"

    def __init__(self):
        self._expenses: dict[int, Expense] = {}
        self._income: dict[int, Income] = {}
        self._next_id = 1
        self._next_income_id = 1

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(unsupported_operation(operation, self.backend_name))

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Restore the previous expenses and income if the block raises."""
        snapshot = (dict(self._expenses), dict(self._income), self._next_id, self._next_income_id)
        try:
            yield
        except BaseException:
            self._expenses, self._income, self._next_id, self._next_income_id = snapshot
            raise

    # Account operations
    def create_account(
        self,
        user_id: str,
        name: str,
        type: AccountType,
        balance: Decimal,
        institution: Optional[str] = None,
        last4: Optional[str] = None,
    ) -> int:
        raise self._unsupported("Creating accounts")

    def get_account(
        self, account_id: int, user_id: Optional[str] = None, for_update: bool = False
    ) -> Optional[Account]:
        raise self._unsupported("Account lookup")

    def list_accounts(self, user_id: str) -> list[Account]:
        raise self._unsupported("Listing accounts")

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        institution: Optional[str] = None,
        last4: Optional[str] = None,
    ) -> None:
        raise self._unsupported("Updating accounts")

    def set_account_balance(self, account_id: int, balance: Decimal) -> None:
        raise self._unsupported("Changing account balances")

    def delete_account(self, account_id: int) -> None:
        raise self._unsupported("Deleting accounts")

    def get_account_expense_count(self, account_id: int) -> int:
        return sum(1 for exp in self._expenses.values() if exp.account_id == account_id)

    # Expense operations
    def create_expense(
        self,
        user_id: str,
        amount: Decimal,
        description: str,
        category: str,
        date: date,
        account_id: Optional[int] = None,
    ) -> int:
        if account_id is not None:
            raise self._unsupported("Linking expenses to accounts")
        expense_id = self._next_id
        self._next_id += 1
        self._expenses[expense_id] = Expense(
            id=expense_id,
            user_id=user_id,
            amount=to_money(amount),
            description=description,
            category=category,
            date=date,
            account_id=None,
            created_at=datetime.now(UTC),
        )
        return expense_id

    def get_expense(self, expense_id: int, user_id: Optional[str] = None) -> Optional[Expense]:
        expense = self._expenses.get(expense_id)
        if expense is None or (user_id is not None and expense.user_id != user_id):
            return None
        return expense

    def list_expenses(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Expense]:
        expenses = [
            exp
            for exp in self._expenses.values()
            if exp.user_id == user_id
            and (account_id is None or exp.account_id == account_id)
            and (start_date is None or exp.date >= start_date)
            and (end_date is None or exp.date <= end_date)
        ]
        return sorted(expenses, key=lambda exp: (exp.date, exp.id), reverse=True)

    def update_expense(
        self,
        expense_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        account_id: Optional[int] = None,
        update_account: bool = False,
    ) -> None:
        expense = self._expenses.get(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(expense_not_found(expense_id))
        if account_id is not None:
            raise self._unsupported("Linking expenses to accounts")

        changes = {}
        if amount is not None:
            changes["amount"] = to_money(amount)
        if description is not None:
            changes["description"] = description
        if category is not None:
            changes["category"] = category
        if date is not None:
            changes["date"] = date
        if update_account:
            changes["account_id"] = None
        self._expenses[expense_id] = replace(expense, **changes)

    def delete_expense(self, expense_id: int) -> bool:
        return self._expenses.pop(expense_id, None) is not None

    def get_expense_totals(self, user_id: str) -> tuple[Decimal, int]:
        amounts = [exp.amount for exp in self._expenses.values() if exp.user_id == user_id]
        return sum(amounts, Decimal("0.00")), len(amounts)

    # Income operations
    def create_income(
        self,
        user_id: str,
        amount: Decimal,
        description: str,
        category: str,
        date: date,
        invoice_number: Optional[str] = None,
    ) -> int:
        income_id = self._next_income_id
        self._next_income_id += 1
        self._income[income_id] = Income(
            id=income_id,
            user_id=user_id,
            amount=to_money(amount),
            description=description,
            category=category,
            date=date,
            invoice_number=invoice_number,
            created_at=datetime.now(UTC),
        )
        return income_id

    def get_income(self, income_id: int, user_id: Optional[str] = None) -> Optional[Income]:
        income = self._income.get(income_id)
        if income is None or (user_id is not None and income.user_id != user_id):
            return None
        return income

    def list_income(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Income]:
        entries = [
            inc
            for inc in self._income.values()
            if inc.user_id == user_id
            and (start_date is None or inc.date >= start_date)
            and (end_date is None or inc.date <= end_date)
        ]
        return sorted(entries, key=lambda inc: (inc.date, inc.id), reverse=True)

    def update_income(
        self,
        income_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        invoice_number: Optional[str] = None,
    ) -> None:
        income = self._income.get(income_id)
        if income is None:
            raise IncomeNotFoundError(income_not_found(income_id))

        changes = {}
        if amount is not None:
            changes["amount"] = to_money(amount)
        if description is not None:
            changes["description"] = description
        if category is not None:
            changes["category"] = category
        if date is not None:
            changes["date"] = date
        if invoice_number is not None:
            changes["invoice_number"] = invoice_number
        self._income[income_id] = replace(income, **changes)

    def delete_income(self, income_id: int) -> bool:
        return self._income.pop(income_id, None) is not None

    def get_income_total(self, user_id: str) -> Decimal:
        return sum(
            (inc.amount for inc in self._income.values() if inc.user_id == user_id), Decimal("0.00")
        )
