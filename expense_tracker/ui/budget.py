"""Budget tab - set category limits and track spending against them."""

from __future__ import annotations

import math
from typing import Any, Dict

import pandas as pd
import streamlit as st

from .. import config
from ..aggregation import STATUS_NEAR, STATUS_OVER, STATUS_UNDER, budget_status, known_categories
from ..exceptions import ValidationError
from ..formatting import escape_currency_for_markdown, format_currency, format_percent
from ..state import AppState
from ..visualization import create_budget_chart
from .add_expense import NEW_CATEGORY_OPTION
from .common import window_selector

STATUS_BADGES = {
    STATUS_UNDER: '🟢 On track',
    STATUS_NEAR: '🟡 Near limit',
    STATUS_OVER: '🔴 Over budget',
}


def submit_budget(state: AppState, category: Any, limit: Any) -> None:
    """Upsert a budget from form values.

    Raises:
        ValidationError: If the category is empty or the limit invalid
    """
    state.budgets.set_budget(category, limit)


def progress_value(percent_used: Any) -> float:
    """Clamp a percentage into the 0..1 range ``st.progress`` accepts."""
    if percent_used is None or (isinstance(percent_used, float) and math.isnan(percent_used)):
        return 1.0
    return max(0.0, min(float(percent_used) / 100.0, 1.0))


def render_budget_tab(state: AppState) -> None:
    st.subheader("🎯 Budgets")
    _render_budget_form(state)
    st.divider()
    _render_budget_tracker(state)


def _render_budget_form(state: AppState) -> None:
    budgets = state.budgets.get_budgets()
    options = known_categories([], budgets, config.DEFAULT_CATEGORIES) + [NEW_CATEGORY_OPTION]

    with st.form("budget_form"):
        col1, col2 = st.columns(2)
        with col1:
            choice = st.selectbox("Category", options, key="budget_category")
            new_category = st.text_input("New category name", key="budget_new_category")
        with col2:
            limit = st.number_input(
                f"Monthly limit ({config.CURRENCY_SYMBOL})",
                min_value=0.0,
                step=100.0,
                format="%.2f",
            )
        submitted = st.form_submit_button("💾 Set Budget")

    if submitted:
        category = new_category if choice == NEW_CATEGORY_OPTION else choice
        try:
            submit_budget(state, category, limit)
        except ValidationError as e:
            st.error(f"❌ {e}")
            return
        st.success(f"✅ Budget for {category.strip()} set to {format_currency(limit)}")


def _render_budget_tracker(state: AppState) -> None:
    st.markdown("#### Budget Tracker")
    budgets = state.budgets.get_budgets()
    if not budgets:
        st.info("No budgets set. Create budgets to track your spending.")
        return

    window = window_selector("Period", key="budget_window")
    status = budget_status(state.expenses.expenses, budgets, window)

    over = int((status['Status'] == STATUS_OVER).sum())
    near = int((status['Status'] == STATUS_NEAR).sum())
    col1, col2, col3 = st.columns(3)
    col1.metric("Total budget", format_currency(status['Limit'].sum()))
    col2.metric("Spent", format_currency(status['Spent'].sum()))
    col3.metric("Alerts", f"{over} over · {near} near")

    for row in status.to_dict("records"):
        _render_budget_row(row)

    st.plotly_chart(create_budget_chart(status, title=f"Budget vs actual · {window.label}"), use_container_width=True)
    st.dataframe(_display_frame(status), use_container_width=True, hide_index=True)


def _render_budget_row(row: Dict[str, Any]) -> None:
    percent = row['Percent Used']
    label_col, badge_col = st.columns([4, 1])
    label_col.markdown(
        f"**{row['Category']}** · {escape_currency_for_markdown(row['Spent'])} of {escape_currency_for_markdown(row['Limit'])} "
        f"({format_percent(percent)})"
    )
    badge_col.write(STATUS_BADGES.get(row['Status'], row['Status']))
    st.progress(progress_value(percent))
    if row['Remaining'] < 0:
        st.caption(f"Over by {format_currency(-row['Remaining'])}")
    else:
        st.caption(f"{format_currency(row['Remaining'])} remaining")


def _display_frame(status: pd.DataFrame) -> pd.DataFrame:
    display = status.copy()
    for column in ('Limit', 'Spent', 'Remaining'):
        display[column] = display[column].map(format_currency)
    display['Percent Used'] = display['Percent Used'].map(format_percent)
    return display
