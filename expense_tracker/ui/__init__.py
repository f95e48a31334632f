"""Streamlit tab renderers.

Each module renders one tab of the app and receives the session's
:class:`~expense_tracker.state.AppState`:

* ``add_expense`` – add/edit form
* ``expense_list`` – filterable list with edit, delete, clear and export
* ``budget`` – budget form and tracker
* ``reports`` – windowed spending reports
"""

from .add_expense import render_add_expense_tab
from .budget import render_budget_tab
from .expense_list import render_expense_list_tab
from .reports import render_reports_tab

__all__ = [
    'render_add_expense_tab',
    'render_expense_list_tab',
    'render_budget_tab',
    'render_reports_tab',
]
