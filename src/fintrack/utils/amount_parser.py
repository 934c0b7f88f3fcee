"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from fintrack.domain.balance import to_money


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user-entered amount into a two-place Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "€123.45", "₹123.45"
    - "1,234.56"
    - "-123.45" and "(123.45)" (negative; rejected later by the services)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount quantized to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return to_money(-amount if is_negative else amount)
