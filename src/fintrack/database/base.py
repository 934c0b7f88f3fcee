"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import Account, AccountType, Expense, Income


class Database(ABC):
    """Abstract database interface for fintrack.

    Every backend implements every method. A backend that cannot support an
    operation raises UnsupportedOperationError instead of omitting it.
    """

    backend_name: str = "abstract"

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Run the enclosed writes as one unit of work.

        Writes are committed when the outermost block exits normally and
        rolled back together if an exception escapes it.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: str,
        name: str,
        type: AccountType,
        balance: Decimal,
        institution: Optional[str] = None,
        last4: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(
        self, account_id: int, user_id: Optional[str] = None, for_update: bool = False
    ) -> Optional[Account]:
        """Get account by ID, optionally scoped to a user.

        Args:
            for_update: Lock the account row until the current unit of work ends
        """
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List a user's accounts ordered by name."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        institution: Optional[str] = None,
        last4: Optional[str] = None,
    ) -> None:
        """Update descriptive account fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def set_account_balance(self, account_id: int, balance: Decimal) -> None:
        """Overwrite an account's balance."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_expense_count(self, account_id: int) -> int:
        """Get count of expenses linked to an account."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        user_id: str,
        amount: Decimal,
        description: str,
        category: str,
        date: date,
        account_id: Optional[int] = None,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int, user_id: Optional[str] = None) -> Optional[Expense]:
        """Get expense by ID, optionally scoped to a user."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Expense]:
        """List a user's expenses, newest first, with optional filters."""
        pass

    @abstractmethod
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
        """Update expense fields.

        Args:
            update_account: If True, set account_id even if it is None (to unlink)
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> bool:
        """Delete an expense. Returns False if it did not exist."""
        pass

    @abstractmethod
    def get_expense_totals(self, user_id: str) -> tuple[Decimal, int]:
        """Return the sum and count of a user's expenses."""
        pass

    # Income operations
    @abstractmethod
    def create_income(
        self,
        user_id: str,
        amount: Decimal,
        description: str,
        category: str,
        date: date,
        invoice_number: Optional[str] = None,
    ) -> int:
        """Record income. Returns income ID."""
        pass

    @abstractmethod
    def get_income(self, income_id: int, user_id: Optional[str] = None) -> Optional[Income]:
        """Get income entry by ID, optionally scoped to a user."""
        pass

    @abstractmethod
    def list_income(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Income]:
        """List a user's income entries, newest first."""
        pass

    @abstractmethod
    def update_income(
        self,
        income_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        invoice_number: Optional[str] = None,
    ) -> None:
        """Update income fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_income(self, income_id: int) -> bool:
        """Delete an income entry. Returns False if it did not exist."""
        pass

    @abstractmethod
    def get_income_total(self, user_id: str) -> Decimal:
        """Return the sum of a user's income."""
        pass
