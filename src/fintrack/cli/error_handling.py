"""CLI error handling helpers."""

import click

from fintrack.domain.errors import (
    DomainError,
    InsufficientFundsError,
    OverPaymentError,
    UnsupportedOperationError,
)

# Checked in order; the first matching error class supplies the hint
_HINTS: list[tuple[type[DomainError], str]] = [
    (InsufficientFundsError, "Transfer money into the account first, or pick another account."),
    (OverPaymentError, "Run 'fintrack account list' to see what the card owes."),
    (
        UnsupportedOperationError,
        "Accounts need a SQL database; pass --db-path or --database-url.",
    ),
]


def error_hint(error: Exception) -> str | None:
    """Return a follow-up suggestion for an error, if there is one."""
    for error_type, hint in _HINTS:
        if isinstance(error, error_type):
            return hint
    return None


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` plus an optional hint to stderr and exit with status 1."""
    click.echo(f"Error: {error}", err=True)
    hint = error_hint(error)
    if hint is not None:
        click.echo(f"Hint: {hint}", err=True)
    ctx.exit(1)
