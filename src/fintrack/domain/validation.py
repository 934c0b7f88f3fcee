"""Field validation shared by the domain services."""

from typing import Optional

from fintrack.domain.errors import ValidationError


def require_text(value: Optional[str], field: str) -> str:
    """Return the stripped value, raising ValidationError if it is blank."""
    value = value.strip() if value else ""
    if not value:
        raise ValidationError(f"{field} is required")
    return value
