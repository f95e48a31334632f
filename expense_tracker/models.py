"""Expense record and its storage representation.

Expenses are immutable; an edit replaces the whole record in the store.
The serialized form uses the field names ``id``, ``amount``, ``category``,
``description``, ``date`` and ``createdAt``.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from .exceptions import ValidationError


def new_expense_id() -> str:
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds')


@dataclass(frozen=True)
class Expense:
    """A single recorded outflow."""
    amount: float
    category: str
    date: date
    description: str = ''
    id: Optional[str] = None
    created_at: Optional[str] = None  # ISO 8601, set by the store on add

    def __post_init__(self) -> None:
        if not math.isfinite(self.amount):
            raise ValidationError(f"Expense amount must be finite: {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Expense amount cannot be negative: {self.amount}")
        if not self.category or not self.category.strip():
            raise ValidationError("Expense category cannot be empty")

    def with_identity(self) -> 'Expense':
        """Return a copy with an id and creation timestamp filled in where absent."""
        return replace(
            self,
            id=self.id or new_expense_id(),
            created_at=self.created_at or utc_timestamp(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'amount': self.amount,
            'category': self.category,
            'description': self.description,
            'date': self.date.isoformat(),
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Expense':
        """Build an expense from its stored form.

        Raises:
            ValidationError: If a field is missing or has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Expected an object, got {type(data).__name__}")
        try:
            amount = float(data['amount'])
            raw_date = data['date']
            category = str(data['category'])
        except KeyError as e:
            raise ValidationError(f"Missing field {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid amount {data.get('amount')!r}") from e

        if isinstance(raw_date, date):
            expense_date = raw_date
        else:
            try:
                expense_date = date.fromisoformat(str(raw_date)[:10])
            except ValueError as e:
                raise ValidationError(f"Invalid date {raw_date!r}") from e

        return cls(
            id=data.get('id'),
            amount=amount,
            category=category,
            description=str(data.get('description') or ''),
            date=expense_date,
            created_at=data.get('createdAt'),
        )
