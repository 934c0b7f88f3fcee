"""Income domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from fintrack.database.base import Database
from fintrack.domain.balance import require_positive
from fintrack.domain.entities import Income as IncomeEntity
from fintrack.domain.errors import IncomeNotFoundError, income_not_found
from fintrack.domain.validation import require_text

logger = structlog.get_logger(__name__)


class IncomeService:
    """Service for recording income.

    Income feeds the summary's net balance. It is not linked to an account and
    never moves an account balance; money arriving in an account is recorded
    as a transfer or as the account's opening balance.
    """

    def __init__(self, db: Database):
        """Initialize income service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_income(
        self,
        user_id: str,
        amount: Decimal | str | int,
        description: str,
        category: str,
        date: Optional[date] = None,
        invoice_number: Optional[str] = None,
    ) -> IncomeEntity:
        """Record income.

        Args:
            user_id: Owner of the entry
            amount: Positive amount
            description: Where the money came from
            category: Income category (e.g., Salary)
            date: Date received (defaults to today)
            invoice_number: Optional invoice or receipt number

        Returns:
            Created income entity

        Raises:
            ValidationError: If amount, description or category is invalid
        """
        amount = require_positive(amount)
        description = require_text(description, "Description")
        category = require_text(category, "Category")
        if invoice_number is not None:
            invoice_number = invoice_number.strip() or None

        income_id = self.db.create_income(
            user_id=user_id,
            amount=amount,
            description=description,
            category=category,
            date=date if date is not None else _today(),
            invoice_number=invoice_number,
        )
        logger.info("income_recorded", income_id=income_id, amount=str(amount))
        return self.db.get_income(income_id)

    def get_income(self, income_id: int, user_id: str) -> Optional[IncomeEntity]:
        """Get a user's income entry by ID, or None if not found."""
        return self.db.get_income(income_id, user_id=user_id)

    def list_income(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[IncomeEntity]:
        """List a user's income entries, newest first."""
        return self.db.list_income(user_id, start_date=start_date, end_date=end_date)

    def update_income(
        self,
        income_id: int,
        user_id: str,
        amount: Optional[Decimal | str | int] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        invoice_number: Optional[str] = None,
    ) -> IncomeEntity:
        """Update the provided fields of an income entry.

        Raises:
            IncomeNotFoundError: If the entry does not exist for this user
            ValidationError: If a provided field is invalid
        """
        if amount is not None:
            amount = require_positive(amount)
        if description is not None:
            description = require_text(description, "Description")
        if category is not None:
            category = require_text(category, "Category")

        if self.db.get_income(income_id, user_id=user_id) is None:
            raise IncomeNotFoundError(income_not_found(income_id))

        self.db.update_income(
            income_id,
            amount=amount,
            description=description,
            category=category,
            date=date,
            invoice_number=invoice_number,
        )
        return self.db.get_income(income_id)

    def delete_income(self, income_id: int, user_id: str) -> bool:
        """Delete a user's income entry. Returns False if it did not exist."""
        if self.db.get_income(income_id, user_id=user_id) is None:
            return False
        return self.db.delete_income(income_id)


def _today() -> date:
    return date.today()
