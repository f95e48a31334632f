"""Per-session application state shared by every tab."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, MutableMapping, Optional

from . import config
from .budget_store import BudgetStore
from .expense_store import ExpenseStore
from .persistence import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

SESSION_KEY = 'expense_tracker_state'


@dataclass
class AppState:
    """Both stores plus the notifications waiting to be shown."""
    storage: KeyValueStore
    expenses: ExpenseStore = field(init=False)
    budgets: BudgetStore = field(init=False)
    notifications: List[str] = field(default_factory=list)
    editing_expense_id: Optional[str] = None
    pending_delete_id: Optional[str] = None
    form_generation: int = 0
    saved_message: Optional[str] = None

    def __post_init__(self) -> None:
        self.expenses = ExpenseStore(self.storage, notify=self.notifications.append)
        self.budgets = BudgetStore(self.storage, notify=self.notifications.append)

    def drain_notifications(self) -> List[str]:
        """Return pending notifications and forget them."""
        pending = list(self.notifications)
        self.notifications.clear()
        return pending


def create_app_state(storage: Optional[KeyValueStore] = None) -> AppState:
    if storage is None:
        config.ensure_data_directories()
        storage = JsonFileStore()
    state = AppState(storage)
    logger.info(
        "Loaded %d expenses and %d budgets",
        len(state.expenses), len(state.budgets.get_budgets()),
    )
    return state


def get_app_state(session_state: MutableMapping[str, Any], storage: Optional[KeyValueStore] = None) -> AppState:
    """Fetch the session's state, creating it on first use."""
    if SESSION_KEY not in session_state:
        session_state[SESSION_KEY] = create_app_state(storage)
    return session_state[SESSION_KEY]
