"""Input validation for the expense and budget forms.

Everything the user types passes through here before it reaches a store.
Each function raises :class:`~expense_tracker.exceptions.ValidationError`
with a message suitable for showing next to the form.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional, Tuple

from .exceptions import ValidationError
from .models import Expense


def parse_amount(value: Any, *, field: str = 'Amount') -> float:
    """Parse a money amount entered by the user.

    Args:
        value: Raw input (number or string such as ``"1,250.50"``)
        field: Field label used in error messages

    Returns:
        The amount as a float rounded to two decimal places

    Raises:
        ValidationError: If the value is empty, not numeric, not finite or negative

    Example:
        >>> parse_amount("1,250.50")
        1250.5
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")

    text = value.replace(',', '').strip() if isinstance(value, str) else value
    try:
        amount = float(text)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None

    if not math.isfinite(amount):
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative")
    return round(amount, 2)


def clean_category(value: Any) -> str:
    """Strip a category name and reject empty ones."""
    category = str(value).strip() if value is not None else ''
    if not category:
        raise ValidationError("Category is required")
    return category


def parse_date(value: Any) -> date:
    """Accept a ``date``, ``datetime`` or ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from None
    raise ValidationError("Date is required")


def build_expense(
    amount: Any,
    category: Any,
    expense_date: Any,
    description: Optional[str] = '',
    *,
    expense_id: Optional[str] = None,
    created_at: Optional[str] = None,
) -> Expense:
    """Validate raw form values and build an :class:`Expense`.

    Pass ``expense_id`` and ``created_at`` when editing so the replacement
    keeps the identity of the original record.
    """
    return Expense(
        id=expense_id,
        amount=parse_amount(amount),
        category=clean_category(category),
        description=(description or '').strip(),
        date=parse_date(expense_date),
        created_at=created_at,
    )


def validate_budget(category: Any, limit: Any) -> Tuple[str, float]:
    """Validate a budget form submission.

    Returns:
        Tuple of (cleaned category, limit)
    """
    return clean_category(category), parse_amount(limit, field='Budget limit')
