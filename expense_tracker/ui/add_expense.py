"""Add Expense tab - entry form, reused for editing an existing expense."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

import streamlit as st

from .. import config
from ..aggregation import known_categories
from ..exceptions import ValidationError
from ..formatting import format_currency
from ..models import Expense
from ..state import AppState
from ..validation import build_expense
from .common import rerun

logger = logging.getLogger(__name__)

NEW_CATEGORY_OPTION = '➕ New category...'


def editing_expense(state: AppState) -> Optional[Expense]:
    """The expense being edited, or None (also clears a stale edit id)."""
    if state.editing_expense_id is None:
        return None
    expense = state.expenses.get(state.editing_expense_id)
    if expense is None:
        state.editing_expense_id = None
    return expense


def submit_expense(state: AppState, amount: Any, category: Any, description: str, expense_date: Any) -> Expense:
    """Validate form values and add them, or replace the expense being edited.

    A successful add moves the form to a fresh generation so its fields
    start empty on the next run.

    Raises:
        ValidationError: If any value is invalid; nothing is stored
    """
    current = editing_expense(state)
    if current is None:
        saved = state.expenses.add(build_expense(amount, category, expense_date, description))
        state.form_generation += 1
        return saved

    updated = build_expense(
        amount, category, expense_date, description,
        expense_id=current.id, created_at=current.created_at,
    )
    state.expenses.update(updated)
    state.editing_expense_id = None
    return updated


def cancel_edit(state: AppState) -> None:
    state.editing_expense_id = None


def form_suffix(state: AppState, current: Optional[Expense]) -> str:
    """Suffix for the form's widget keys; a new suffix means fresh widgets."""
    if current is not None:
        return f"edit_{current.id}"
    return f"new_{state.form_generation}"


def render_add_expense_tab(state: AppState) -> None:
    current = editing_expense(state)
    st.subheader("✏️ Edit Expense" if current else "➕ Add Expense")
    if state.saved_message:
        st.success(state.saved_message)
        state.saved_message = None

    categories = known_categories(
        state.expenses.expenses, state.budgets.get_budgets(), config.DEFAULT_CATEGORIES
    )
    options = categories + [NEW_CATEGORY_OPTION]
    index = options.index(current.category) if current else 0
    suffix = form_suffix(state, current)

    with st.form("expense_form"):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                f"Amount ({config.CURRENCY_SYMBOL})",
                min_value=0.0,
                step=10.0,
                format="%.2f",
                value=float(current.amount) if current else 0.0,
                key=f"expense_amount_{suffix}",
            )
            expense_date = st.date_input(
                "Date",
                value=current.date if current else date.today(),
                key=f"expense_date_{suffix}",
            )
        with col2:
            choice = st.selectbox("Category", options, index=index, key=f"expense_category_{suffix}")
            new_category = st.text_input(
                "New category name",
                help=f"Used when '{NEW_CATEGORY_OPTION}' is selected",
                key=f"expense_new_category_{suffix}",
            )
        description = st.text_input(
            "Description",
            value=current.description if current else "",
            placeholder="What was this for?",
            key=f"expense_description_{suffix}",
        )

        action_col, cancel_col = st.columns(2)
        submitted = action_col.form_submit_button("💾 Update Expense" if current else "➕ Add Expense")
        cancelled = cancel_col.form_submit_button("Cancel") if current else False

    if cancelled:
        cancel_edit(state)
        rerun()
        return

    if submitted:
        category = new_category if choice == NEW_CATEGORY_OPTION else choice
        try:
            saved = submit_expense(state, amount, category, description, expense_date)
        except ValidationError as e:
            st.error(f"❌ {e}")
            return
        verb = "Updated" if current else "Added"
        logger.info("%s expense %s", verb, saved.id)
        state.saved_message = f"✅ {verb} {format_currency(saved.amount)} in {saved.category}"
        rerun()
