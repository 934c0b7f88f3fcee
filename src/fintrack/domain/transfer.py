"""Transfer domain service."""

from decimal import Decimal

import structlog

from fintrack.database.base import Database
from fintrack.domain.balance import Direction, apply_amount, require_positive
from fintrack.domain.entities import TransferResult
from fintrack.domain.errors import (
    AccountNotFoundError,
    DomainError,
    SourceDestinationEqualError,
    account_not_found,
)

logger = structlog.get_logger(__name__)


class TransferService:
    """Service for moving money between a user's accounts."""

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def transfer(
        self, user_id: str, from_id: int, to_id: int, amount: Decimal | str | int
    ) -> TransferResult:
        """Move an amount from one account to another.

        The source leg is a spend and the destination leg a receive, both under
        the type-aware balance rule: paying into a credit card lowers what it
        owes, and drawing from one (a cash advance) raises it. Both legs are
        validated before either balance is written.

        Args:
            user_id: Owner of both accounts
            from_id: Source account ID
            to_id: Destination account ID
            amount: Positive amount

        Returns:
            New balances of both accounts

        Raises:
            InvalidAmountError: If amount is not positive
            SourceDestinationEqualError: If both IDs are the same
            AccountNotFoundError: If either account does not exist for this user
            InsufficientFundsError: If a non-credit source cannot cover the amount
            OverPaymentError: If the payment exceeds what a credit card owes
        """
        amount = require_positive(amount)
        if from_id == to_id:
            raise SourceDestinationEqualError("Source and destination must differ")

        try:
            with self.db.atomic():
                # Lock in ID order so concurrent opposite transfers cannot deadlock
                locked = {}
                for account_id in sorted((from_id, to_id)):
                    account = self.db.get_account(account_id, user_id=user_id, for_update=True)
                    if account is None:
                        raise AccountNotFoundError(account_not_found(account_id))
                    locked[account_id] = account
                source, destination = locked[from_id], locked[to_id]

                from_balance = apply_amount(source, amount, Direction.SPEND)
                to_balance = apply_amount(destination, amount, Direction.RECEIVE)

                self.db.set_account_balance(source.id, from_balance)
                self.db.set_account_balance(destination.id, to_balance)
        except DomainError as exc:
            logger.warning(
                "transfer_rejected", from_id=from_id, to_id=to_id, amount=str(amount), reason=str(exc)
            )
            raise

        logger.info(
            "transfer_completed",
            from_id=from_id,
            to_id=to_id,
            amount=str(amount),
            from_balance=str(from_balance),
            to_balance=str(to_balance),
        )
        return TransferResult(from_balance=from_balance, to_balance=to_balance)
