"""Expense domain service.

Expenses linked to an account move that account's balance. Every balance
change is computed with the balance rule and validated before anything is
written, and all writes of one operation share a single unit of work.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from fintrack.database.base import Database
from fintrack.domain.balance import Direction, apply_amount, require_positive, revert_amount
from fintrack.domain.entities import Account, Expense as ExpenseEntity
from fintrack.domain.errors import (
    AccountNotFoundError,
    DomainError,
    ExpenseNotFoundError,
    ValidationError,
    account_not_found,
    expense_not_found,
)
from fintrack.domain.validation import require_text

logger = structlog.get_logger(__name__)


class ExpenseService:
    """Service for managing expenses and their effect on account balances."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def _lock_account(self, account_id: int, user_id: str) -> Account:
        account = self.db.get_account(account_id, user_id=user_id, for_update=True)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def _write_balance(self, account: Account, new_balance: Decimal) -> None:
        self.db.set_account_balance(account.id, new_balance)
        logger.info(
            "balance_updated",
            account_id=account.id,
            old_balance=str(account.balance),
            new_balance=str(new_balance),
        )

    def create_expense(
        self,
        user_id: str,
        amount: Decimal | str | int,
        description: str,
        category: str,
        date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> ExpenseEntity:
        """Create an expense, spending its amount from the linked account.

        Args:
            user_id: Owner of the expense
            amount: Positive amount
            description: What the money was spent on
            category: Expense category
            date: Expense date (defaults to today)
            account_id: Optional account the expense was paid from

        Returns:
            Created expense entity

        Raises:
            ValidationError: If amount, description or category is invalid
            AccountNotFoundError: If the account does not exist for this user
            InsufficientFundsError: If a non-credit account cannot cover the amount
        """
        amount = require_positive(amount)
        description = require_text(description, "Description")
        category = require_text(category, "Category")
        expense_date = date if date is not None else _today()

        try:
            with self.db.atomic():
                account = None
                new_balance = None
                if account_id is not None:
                    account = self._lock_account(account_id, user_id)
                    new_balance = apply_amount(account, amount, Direction.SPEND)

                expense_id = self.db.create_expense(
                    user_id=user_id,
                    amount=amount,
                    description=description,
                    category=category,
                    date=expense_date,
                    account_id=account_id,
                )
                if account is not None:
                    self._write_balance(account, new_balance)
        except DomainError as exc:
            logger.warning("expense_create_rejected", account_id=account_id, reason=str(exc))
            raise

        return self.db.get_expense(expense_id)

    def get_expense(self, expense_id: int, user_id: str) -> Optional[ExpenseEntity]:
        """Get a user's expense by ID, or None if not found."""
        return self.db.get_expense(expense_id, user_id=user_id)

    def list_expenses(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ExpenseEntity]:
        """List a user's expenses, newest first."""
        return self.db.list_expenses(
            user_id, account_id=account_id, start_date=start_date, end_date=end_date
        )

    def update_expense(
        self,
        expense_id: int,
        user_id: str,
        amount: Optional[Decimal | str | int] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        account_id: Optional[int] = None,
        clear_account: bool = False,
    ) -> ExpenseEntity:
        """Update an expense and move its balance effect accordingly.

        The old effect is reverted and the new effect reapplied, also when the
        account does not change. Both steps are validated before the expense
        or any balance is written.

        Args:
            expense_id: Expense ID to update
            user_id: Owner of the expense
            amount: Optional new amount
            description: Optional new description
            category: Optional new category
            date: Optional new date
            account_id: Optional new account
            clear_account: If True, unlink the expense from its account

        Returns:
            Updated expense entity

        Raises:
            ExpenseNotFoundError: If the expense does not exist for this user
            AccountNotFoundError: If the new account does not exist for this user
            InsufficientFundsError: If the target account cannot cover the new amount
            OverPaymentError: If reverting would leave a credit card owing less than zero
        """
        if clear_account and account_id is not None:
            raise ValidationError("Cannot set both account_id and clear_account")
        if amount is not None:
            amount = require_positive(amount)
        if description is not None:
            description = require_text(description, "Description")
        if category is not None:
            category = require_text(category, "Category")

        try:
            with self.db.atomic():
                existing = self.db.get_expense(expense_id, user_id=user_id)
                if existing is None:
                    raise ExpenseNotFoundError(expense_not_found(expense_id))

                new_amount = amount if amount is not None else existing.amount
                if clear_account:
                    new_account_id = None
                elif account_id is not None:
                    new_account_id = account_id
                else:
                    new_account_id = existing.account_id

                # Same ID order as transfers, so the two cannot deadlock
                involved = {existing.account_id, new_account_id} - {None}
                locked = {
                    acc_id: self._lock_account(acc_id, user_id) for acc_id in sorted(involved)
                }

                old_account = None
                reverted_balance = None
                if existing.account_id is not None:
                    old_account = locked[existing.account_id]
                    reverted_balance = revert_amount(old_account, existing.amount)

                new_account = None
                applied_balance = None
                if new_account_id is not None:
                    new_account = locked[new_account_id]
                    if new_account_id == existing.account_id:
                        applied_balance = apply_amount(
                            new_account, new_amount, Direction.SPEND, balance=reverted_balance
                        )
                    else:
                        applied_balance = apply_amount(new_account, new_amount, Direction.SPEND)

                self.db.update_expense(
                    expense_id,
                    amount=amount,
                    description=description,
                    category=category,
                    date=date,
                    account_id=new_account_id,
                    update_account=clear_account,
                )

                if old_account is not None and old_account is not new_account:
                    self._write_balance(old_account, reverted_balance)
                if new_account is not None:
                    self._write_balance(new_account, applied_balance)
        except DomainError as exc:
            logger.warning("expense_update_rejected", expense_id=expense_id, reason=str(exc))
            raise

        return self.db.get_expense(expense_id)

    def delete_expense(self, expense_id: int, user_id: str) -> bool:
        """Delete an expense and give its amount back to the linked account.

        Returns:
            True if the expense was deleted, False if it did not exist

        Raises:
            OverPaymentError: If reverting would leave a credit card owing less than zero
        """
        try:
            with self.db.atomic():
                existing = self.db.get_expense(expense_id, user_id=user_id)
                if existing is None:
                    return False

                account = None
                reverted_balance = None
                if existing.account_id is not None:
                    account = self._lock_account(existing.account_id, user_id)
                    reverted_balance = revert_amount(account, existing.amount)

                deleted = self.db.delete_expense(expense_id)
                if deleted and account is not None:
                    self._write_balance(account, reverted_balance)
        except DomainError as exc:
            logger.warning("expense_delete_rejected", expense_id=expense_id, reason=str(exc))
            raise

        return deleted


def _today() -> date:
    """Return today's date."""
    return date.today()
