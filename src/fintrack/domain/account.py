"""Account domain service."""

import re
from decimal import Decimal
from typing import Optional

import structlog

from fintrack.database.base import Database
from fintrack.domain.balance import to_money
from fintrack.domain.entities import Account as AccountEntity, AccountType
from fintrack.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    DependencyError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)

logger = structlog.get_logger(__name__)

LAST4_PATTERN = re.compile(r"^\d{4}$")


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_name(self, user_id: str, name: str, exclude_id: Optional[int] = None) -> str:
        name = name.strip() if name else ""
        if not name:
            raise ValidationError("Account name is required")
        for acc in self.db.list_accounts(user_id):
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(duplicate_account_name(name))
        return name

    @staticmethod
    def _validate_last4(last4: Optional[str]) -> None:
        if last4 is not None and not LAST4_PATTERN.match(last4):
            raise ValidationError(f"last4 must be exactly 4 digits, got '{last4}'")

    def create_account(
        self,
        user_id: str,
        name: str,
        type: AccountType | str,
        balance: Decimal | str | int = Decimal("0"),
        institution: Optional[str] = None,
        last4: Optional[str] = None,
    ) -> int:
        """Create a new account.

        Args:
            user_id: Owner of the account
            name: Account name, unique per user
            type: Account type
            balance: Opening balance (funds held, or amount owed for credit cards)
            institution: Optional bank or issuer name
            last4: Optional last four digits of the card or account number

        Returns:
            Account ID

        Raises:
            ValidationError: If name, type, balance or last4 is invalid
            ConflictError: If the user already has an account with this name
        """
        try:
            account_type = AccountType(type)
        except ValueError:
            valid = ", ".join(t.value for t in AccountType)
            raise ValidationError(f"Invalid account type '{type}'. Valid types: {valid}")

        opening = to_money(balance)
        if opening < 0:
            raise ValidationError("Opening balance cannot be negative")
        self._validate_last4(last4)
        name = self._validate_name(user_id, name)

        account_id = self.db.create_account(
            user_id=user_id,
            name=name,
            type=account_type,
            balance=opening,
            institution=institution,
            last4=last4,
        )
        logger.info("account_created", account_id=account_id, type=account_type.value)
        return account_id

    def get_account(self, account_id: int, user_id: str) -> Optional[AccountEntity]:
        """Get a user's account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id, user_id=user_id)

    def require_account(self, account_id: int, user_id: str) -> AccountEntity:
        """Get a user's account by ID or raise AccountNotFoundError."""
        account = self.db.get_account(account_id, user_id=user_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, user_id: str) -> list[AccountEntity]:
        """List a user's accounts ordered by name."""
        return self.db.list_accounts(user_id)

    def update_account(
        self,
        account_id: int,
        user_id: str,
        name: Optional[str] = None,
        institution: Optional[str] = None,
        last4: Optional[str] = None,
    ) -> None:
        """Update an account's descriptive fields.

        Type and balance cannot be changed here; balances only move through
        expenses and transfers.

        Raises:
            AccountNotFoundError: If the account does not exist for this user
            ConflictError: If the new name is already taken
        """
        self.require_account(account_id, user_id)
        if name is not None:
            name = self._validate_name(user_id, name, exclude_id=account_id)
        self._validate_last4(last4)
        self.db.update_account(account_id, name=name, institution=institution, last4=last4)

    def delete_account(self, account_id: int, user_id: str) -> None:
        """Delete an account.

        Raises:
            AccountNotFoundError: If the account does not exist for this user
            DependencyError: If expenses are still linked to the account
        """
        self.require_account(account_id, user_id)

        expense_count = self.db.get_account_expense_count(account_id)
        if expense_count > 0:
            raise DependencyError(account_delete_blocked(account_id, expense_count))

        self.db.delete_account(account_id)
        logger.info("account_deleted", account_id=account_id)
