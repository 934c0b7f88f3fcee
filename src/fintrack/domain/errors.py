"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is zero, negative or not a number."""


class SourceDestinationEqualError(ValidationError):
    """Transfer source and destination are the same account."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountNotFoundError(NotFoundError):
    """Account does not exist or belongs to another user."""


class ExpenseNotFoundError(NotFoundError):
    """Expense does not exist or belongs to another user."""


class IncomeNotFoundError(NotFoundError):
    """Income entry does not exist or belongs to another user."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class InsufficientFundsError(DomainError):
    """A non-credit account balance would go negative."""


class OverPaymentError(DomainError):
    """A credit card owed amount would go negative."""


class UnsupportedOperationError(DomainError):
    """The configured storage backend does not implement this operation."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def income_not_found(income_id: int) -> str:
    """Return message for missing income entry."""
    return f"Income {income_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def non_positive_amount(amount: Decimal) -> str:
    """Return message for a zero or negative amount."""
    return f"Amount must be positive, got {amount}"


def amount_out_of_range(limit: Decimal) -> str:
    """Return message for an amount too large to store."""
    return f"Amount must not exceed {limit:,.2f}"


def insufficient_funds(account_name: str, balance: Decimal, amount: Decimal) -> str:
    """Return message when an account cannot cover an amount."""
    return (
        f"Insufficient balance in account '{account_name}': "
        f"balance {balance:.2f}, required {amount:.2f}"
    )


def over_payment(account_name: str, owed: Decimal, amount: Decimal) -> str:
    """Return message when a payment exceeds what a credit card owes."""
    return (
        f"Payment exceeds credit card owed amount for '{account_name}': "
        f"owed {owed:.2f}, payment {amount:.2f}"
    )


def unsupported_operation(operation: str, backend: str) -> str:
    """Return message for an operation the storage backend cannot perform."""
    return f"{operation} is not supported by the {backend} storage backend"


def account_delete_blocked(account_id: int, expense_count: int) -> str:
    """Return message when account still has linked expenses."""
    return (
        f"Cannot delete account {account_id}: it has {expense_count} "
        f"linked expense{'s' if expense_count != 1 else ''}. "
        "Please reassign or delete them first."
    )
