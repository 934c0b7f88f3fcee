"""Summary domain service."""

from decimal import Decimal

from fintrack.database.base import Database
from fintrack.domain.entities import Summary
from fintrack.domain.errors import UnsupportedOperationError


class SummaryService:
    """Aggregates income, expenses and account balances for a user."""

    def __init__(self, db: Database):
        self.db = db

    def get_summary(self, user_id: str) -> Summary:
        """Build a summary of a user's income, spending and account positions.

        Backends without account support report an empty account snapshot.
        """
        total_expenses, expense_count = self.db.get_expense_totals(user_id)
        total_income = self.db.get_income_total(user_id)

        try:
            accounts = self.db.list_accounts(user_id)
        except UnsupportedOperationError:
            accounts = []

        total_funds = sum(
            (acc.balance for acc in accounts if not acc.type.is_credit), Decimal("0.00")
        )
        total_owed = sum((acc.balance for acc in accounts if acc.type.is_credit), Decimal("0.00"))

        return Summary(
            total_expenses=total_expenses,
            expense_count=expense_count,
            total_funds=total_funds,
            total_owed=total_owed,
            total_income=total_income,
            accounts=accounts,
        )
