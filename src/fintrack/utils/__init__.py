"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
