"""Top-level package for the Expense Tracker.

The primary modules are:

* ``persistence`` – device-local key-value storage
* ``expense_store`` / ``budget_store`` – write-through stores
* ``aggregation`` – totals, budget status and reports
* ``app`` – the Streamlit app that ties everything together

To run the app from the command line you can execute:

```bash
streamlit run expense_tracker/Home.py
```
"""

from .aggregation import budget_status, category_totals, report_summary
from .budget_store import BudgetStore
from .exceptions import PersistenceError, ValidationError
from .expense_store import ExpenseStore
from .models import Expense
from .persistence import InMemoryStore, JsonFileStore, KeyValueStore
from .state import AppState, create_app_state

__all__ = [
    "AppState",
    "BudgetStore",
    "Expense",
    "ExpenseStore",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "PersistenceError",
    "ValidationError",
    "budget_status",
    "category_totals",
    "create_app_state",
    "report_summary",
]
