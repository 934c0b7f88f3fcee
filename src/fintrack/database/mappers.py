"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the table layout changes.
"""

from fintrack.domain import entities as domain
from fintrack.domain.balance import to_money
from fintrack.database.models import (
    Account as ORMAccount,
    Expense as ORMExpense,
    Income as ORMIncome,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        balance=to_money(orm_account.balance),
        institution=orm_account.institution,
        last4=orm_account.last4,
        created_at=orm_account.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        user_id=orm_expense.user_id,
        amount=to_money(orm_expense.amount),
        description=orm_expense.description,
        category=orm_expense.category,
        date=orm_expense.date,
        account_id=orm_expense.account_id,
        created_at=orm_expense.created_at,
    )


def income_to_domain(orm_income: ORMIncome) -> domain.Income:
    """Convert SQLAlchemy Income model to domain Income entity."""
    return domain.Income(
        id=orm_income.id,
        user_id=orm_income.user_id,
        amount=to_money(orm_income.amount),
        description=orm_income.description,
        category=orm_income.category,
        date=orm_income.date,
        invoice_number=orm_income.invoice_number,
        created_at=orm_income.created_at,
    )
