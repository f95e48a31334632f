"""Expenses tab - search, edit, delete, clear and export recorded expenses."""

from __future__ import annotations

import json
from typing import List, Sequence

import pandas as pd
import streamlit as st

from .. import config
from ..aggregation import filter_expenses, known_categories, sort_expenses
from ..formatting import format_currency
from ..models import Expense
from ..state import AppState
from .common import rerun, window_selector

SORT_OPTIONS = {
    'Newest first': ('date', True),
    'Oldest first': ('date', False),
    'Largest amount': ('amount', True),
    'Category': ('category', False),
}


def export_frame(expenses: Sequence[Expense]) -> pd.DataFrame:
    """Expenses in their stored field layout, for CSV download."""
    return pd.DataFrame(
        [expense.to_dict() for expense in expenses],
        columns=['id', 'date', 'category', 'description', 'amount', 'createdAt'],
    )


def export_json(expenses: Sequence[Expense]) -> str:
    return json.dumps([expense.to_dict() for expense in expenses], indent=2, ensure_ascii=False)


def start_edit(state: AppState, expense_id: str) -> None:
    state.editing_expense_id = expense_id
    state.pending_delete_id = None


def request_delete(state: AppState, expense_id: str) -> None:
    state.pending_delete_id = expense_id


def confirm_delete(state: AppState) -> bool:
    """Delete the expense awaiting confirmation."""
    expense_id, state.pending_delete_id = state.pending_delete_id, None
    if expense_id is None:
        return False
    if state.editing_expense_id == expense_id:
        state.editing_expense_id = None
    return state.expenses.delete(expense_id)


def cancel_delete(state: AppState) -> None:
    state.pending_delete_id = None


def clear_all(state: AppState) -> None:
    state.expenses.clear_all()
    state.editing_expense_id = None
    state.pending_delete_id = None


def render_expense_list_tab(state: AppState) -> None:
    st.subheader("🧾 Expenses")

    all_expenses = state.expenses.expenses
    if not all_expenses:
        st.info("No expenses recorded yet. Add one from the Add tab.")
        return

    with st.expander("🔍 Filters", expanded=False):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            window = window_selector("Period", key="list_window", default='All time')
        with col2:
            category = st.selectbox(
                "Category",
                options=[None] + known_categories(all_expenses),
                format_func=lambda x: "All Categories" if x is None else x,
                key="list_category",
            )
        with col3:
            search = st.text_input("Search", placeholder="Description or category", key="list_search")
        with col4:
            sort_label = st.selectbox("Sort", list(SORT_OPTIONS), key="list_sort")

    sort_by, descending = SORT_OPTIONS[sort_label]
    visible = sort_expenses(
        filter_expenses(all_expenses, category=category, text=search, window=window),
        by=sort_by,
        descending=descending,
    )

    total = sum(e.amount for e in visible)
    st.caption(f"Showing {len(visible)} of {len(all_expenses)} expenses · Total {format_currency(total)}")

    if not visible:
        st.info("No expenses match the selected filters.")
    _render_rows(state, visible)

    st.divider()
    _render_export(visible)
    _render_clear_all(state)


def _render_rows(state: AppState, expenses: List[Expense]) -> None:
    for expense in expenses:
        date_col, info_col, amount_col, edit_col, delete_col = st.columns([2, 5, 2, 1, 1])
        date_col.write(expense.date.strftime('%d %b %Y'))
        info_col.markdown(f"**{expense.category}**  \n{expense.description or '—'}")
        amount_col.write(format_currency(expense.amount))
        if edit_col.button("✏️", key=f"edit_{expense.id}", help="Edit this expense"):
            start_edit(state, expense.id)
            rerun()
        if delete_col.button("🗑️", key=f"delete_{expense.id}", help="Delete this expense"):
            request_delete(state, expense.id)

        if state.pending_delete_id == expense.id:
            st.warning(f"Are you sure you want to delete this {format_currency(expense.amount)} expense?")
            yes_col, no_col = st.columns(2)
            if yes_col.button("Delete", key=f"confirm_delete_{expense.id}", type="primary"):
                confirm_delete(state)
                rerun()
            if no_col.button("Keep", key=f"cancel_delete_{expense.id}"):
                cancel_delete(state)
                rerun()


def _render_export(expenses: List[Expense]) -> None:
    st.markdown("##### Export")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="📥 Download CSV",
            data=export_frame(expenses).to_csv(index=False),
            file_name="expenses.csv",
            mime="text/csv",
        )
    with col2:
        st.download_button(
            label="📥 Download JSON",
            data=export_json(expenses),
            file_name="expenses.json",
            mime="application/json",
        )


def _render_clear_all(state: AppState) -> None:
    with st.expander("🧹 Clear all expenses"):
        st.write(
            f"This removes every expense stored on this device ({config.get_data_dir()}). "
            "Budgets are kept."
        )
        confirmed = st.checkbox("I understand this cannot be undone", key="confirm_clear_all")
        if st.button("Clear All Expenses", disabled=not confirmed, type="primary"):
            clear_all(state)
            st.success("All expenses cleared.")
            rerun()
