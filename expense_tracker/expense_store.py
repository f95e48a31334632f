"""Ordered collection of expenses with write-through persistence."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from . import config
from .exceptions import ValidationError
from .models import Expense, new_expense_id
from .persistence import KeyValueStore, Notifier, WriteThroughStore

logger = logging.getLogger(__name__)


class ExpenseStore(WriteThroughStore):
    """Owns the expense list.

    Every mutator rewrites the whole list under the ``expenses`` entry.
    """

    key = config.EXPENSES_KEY

    def __init__(self, storage: KeyValueStore, notify: Optional[Notifier] = None):
        super().__init__(storage, notify)
        self._expenses: List[Expense] = self._load_expenses()

    def _load_expenses(self) -> List[Expense]:
        raw = self._load([])
        if not isinstance(raw, list):
            logger.warning("Ignoring stored %s: expected a list, got %s", self.key, type(raw).__name__)
            self._notify("Saved expenses were unreadable and have been ignored.")
            return []

        expenses: List[Expense] = []
        seen_ids = set()
        skipped = 0
        for entry in raw:
            try:
                expense = Expense.from_dict(entry).with_identity()
                if expense.id in seen_ids:
                    logger.warning("Duplicate expense id %s in saved data; assigning a new id", expense.id)
                    expense = replace(expense, id=new_expense_id())
                seen_ids.add(expense.id)
                expenses.append(expense)
            except ValidationError as e:
                logger.warning("Skipping malformed expense %r: %s", entry, e)
                skipped += 1
        if skipped:
            self._notify(f"Skipped {skipped} saved expense(s) that could not be read.")
        logger.debug("Loaded %d expenses", len(expenses))
        return expenses

    def _save(self) -> bool:
        return self._persist([expense.to_dict() for expense in self._expenses])

    @property
    def expenses(self) -> List[Expense]:
        """Snapshot of the expenses in insertion order."""
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def add(self, expense: Expense) -> Expense:
        """Append an expense, assigning an id and creation time if absent.

        An id that is already in the store is replaced with a fresh one.

        Returns:
            The stored expense
        """
        stored = expense.with_identity()
        if self.get(stored.id) is not None:
            logger.warning("Expense id %s is already in use; assigning a new id", stored.id)
            stored = replace(stored, id=new_expense_id())
        self._expenses.append(stored)
        logger.debug("Added expense %s (%s %.2f)", stored.id, stored.category, stored.amount)
        self._save()
        return stored

    def update(self, expense: Expense) -> bool:
        """Replace the expense with the same id, keeping its position.

        Returns:
            True if a record was replaced, False if the id was not found
        """
        for index, current in enumerate(self._expenses):
            if expense.id is not None and current.id == expense.id:
                # an edit keeps the original creation time unless one is given
                if not expense.created_at:
                    expense = replace(expense, created_at=current.created_at)
                self._expenses[index] = expense.with_identity()
                logger.debug("Updated expense %s", expense.id)
                self._save()
                return True
        logger.debug("Update ignored, expense %s not found", expense.id)
        return False

    def delete(self, expense_id: str) -> bool:
        """Remove an expense. Deleting a missing id changes nothing.

        Returns:
            True if a record was removed
        """
        remaining = [e for e in self._expenses if e.id != expense_id]
        if len(remaining) == len(self._expenses):
            return False
        self._expenses = remaining
        logger.debug("Deleted expense %s", expense_id)
        self._save()
        return True

    def clear_all(self) -> None:
        self._expenses = []
        logger.info("Cleared all expenses")
        self._save()
