"""CLI helpers that parse user-entered amounts and dates or exit with an error."""

from datetime import date
from decimal import Decimal

import click
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import parse_date


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse an amount, or print ``Error: Invalid <label> format`` and exit."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} format: {e}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date, or print ``Error: Invalid <label>`` and exit."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
