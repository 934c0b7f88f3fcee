"""Utility for resolving account names to IDs."""

from fintrack.domain.account import AccountService
from fintrack.domain.errors import AccountNotFoundError


def resolve_account(account_service: AccountService, user_id: str, account: str | int) -> int:
    """Resolve a user's account name or ID to an account ID.

    Args:
        account_service: AccountService instance
        user_id: Owner of the account
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        AccountNotFoundError: If the user has no such account
    """
    if isinstance(account, int):
        account_id = account
    elif account.strip().isdigit():
        account_id = int(account)
    else:
        account_id = None

    if account_id is not None:
        if account_service.get_account(account_id, user_id) is None:
            raise AccountNotFoundError(f"Account ID {account_id} not found")
        return account_id

    for acc in account_service.list_accounts(user_id):
        if acc.name == account:
            return acc.id

    raise AccountNotFoundError(f"Account '{account}' not found")
