"""Reports tab - spending summaries for a chosen period."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from ..aggregation import (
    DateWindow,
    ReportSummary,
    category_breakdown,
    daily_totals,
    known_categories,
    largest_expenses,
    monthly_totals,
    report_summary,
)
from ..formatting import format_currency, format_percent
from ..state import AppState
from ..visualization import create_category_pie_chart, create_trend_chart
from .common import window_selector

# Windows longer than this are charted by month instead of by day
DAILY_TREND_MAX_DAYS = 62


def use_daily_trend(window: DateWindow) -> bool:
    if window.start is None or window.end is None:
        return False
    return (window.end - window.start).days < DAILY_TREND_MAX_DAYS


def render_budget_metric(container, summary: ReportSummary) -> None:
    """Budget usage with the amount left as delta; an overspend shows red."""
    if summary.limit is None:
        container.metric("Budget used", "No budget")
        return
    container.metric(
        "Budget used",
        format_percent(summary.percent_used),
        delta=f"{format_currency(summary.remaining)} left",
        delta_color="normal",
    )


def render_reports_tab(state: AppState) -> None:
    st.subheader("📊 Reports")

    expenses = state.expenses.expenses
    budgets = state.budgets.get_budgets()
    if not expenses:
        st.info("No expenses recorded yet. Reports appear once you add some.")
        return

    col1, col2 = st.columns(2)
    with col1:
        window = window_selector("Period", key="report_window")
    with col2:
        category = st.selectbox(
            "Category",
            options=[None] + known_categories(expenses, budgets),
            format_func=lambda x: "All Categories" if x is None else x,
            key="report_category",
        )

    summary = report_summary(expenses, budgets, window=window, category=category)
    scoped = [e for e in expenses if category is None or e.category == category]

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total spent", format_currency(summary.total_spent))
    m2.metric("Expenses", summary.expense_count)
    m3.metric("Average", format_currency(summary.average_expense))
    render_budget_metric(m4, summary)

    if summary.expense_count == 0:
        st.warning(f"No expenses in {window.label}.")
        return

    if category is None:
        _render_category_section(scoped, window)
    _render_trend_section(scoped, window)
    _render_largest_section(scoped, window)


def _render_category_section(expenses, window: DateWindow) -> None:
    breakdown = category_breakdown(expenses, window)
    chart_col, table_col = st.columns([3, 2])
    with chart_col:
        st.plotly_chart(
            create_category_pie_chart(breakdown, title=f"Spending by category · {window.label}"),
            use_container_width=True,
        )
    with table_col:
        display = breakdown.copy()
        display['Amount'] = display['Amount'].map(format_currency)
        display['Share'] = display['Share'].map(format_percent)
        st.dataframe(display, use_container_width=True, hide_index=True)


def _render_trend_section(expenses, window: DateWindow) -> None:
    if use_daily_trend(window):
        totals, x = daily_totals(expenses, window), "Date"
    else:
        totals, x = monthly_totals(expenses, window), "Month"
    st.plotly_chart(create_trend_chart(totals, x=x), use_container_width=True)


def _render_largest_section(expenses, window: DateWindow) -> None:
    st.markdown("#### 💸 Largest expenses")
    top = largest_expenses(expenses, n=5, window=window)
    st.dataframe(
        pd.DataFrame([
            {
                'Date': e.date.isoformat(),
                'Category': e.category,
                'Description': e.description,
                'Amount': format_currency(e.amount),
            }
            for e in top
        ]),
        use_container_width=True,
        hide_index=True,
    )
