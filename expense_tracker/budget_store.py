"""Per-category budget limits with write-through persistence."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from . import config
from .exceptions import ValidationError
from .persistence import KeyValueStore, Notifier, WriteThroughStore
from .validation import validate_budget

logger = logging.getLogger(__name__)


class BudgetStore(WriteThroughStore):
    """Owns the category -> limit mapping stored under the ``budgets`` entry."""

    key = config.BUDGETS_KEY

    def __init__(self, storage: KeyValueStore, notify: Optional[Notifier] = None):
        super().__init__(storage, notify)
        self._budgets: Dict[str, float] = self._load_budgets()

    def _load_budgets(self) -> Dict[str, float]:
        raw = self._load({})
        if not isinstance(raw, dict):
            logger.warning("Ignoring stored %s: expected an object, got %s", self.key, type(raw).__name__)
            self._notify("Saved budgets were unreadable and have been ignored.")
            return {}

        budgets: Dict[str, float] = {}
        for category, limit in raw.items():
            try:
                name, value = validate_budget(category, limit)
            except ValidationError as e:
                logger.warning("Skipping budget %r=%r: %s", category, limit, e)
                continue
            budgets[name] = value
        return budgets

    def set_budget(self, category: str, limit: float) -> None:
        """Create or replace the limit for a category.

        Raises:
            ValidationError: If the category is empty or the limit negative
        """
        name, value = validate_budget(category, limit)
        self._budgets[name] = value
        logger.debug("Budget for %s set to %.2f", name, value)
        self._persist(dict(self._budgets))

    def get_budgets(self) -> Dict[str, float]:
        return dict(self._budgets)

    def get_budget(self, category: str) -> Optional[float]:
        return self._budgets.get(category)
