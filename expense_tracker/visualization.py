"""Plotly visualisation helpers for the expense tracker.

Each function accepts a table produced by :mod:`aggregation` and returns
a `plotly.graph_objects.Figure` that Streamlit renders via
``st.plotly_chart``.  Empty input yields an empty figure titled
"No data to display" rather than an error.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import config
from .aggregation import STATUS_NEAR, STATUS_OVER, STATUS_UNDER

STATUS_COLORS = {
    STATUS_UNDER: '#2e7d32',
    STATUS_NEAR: '#f9a825',
    STATUS_OVER: '#c62828',
}


def _empty_figure(message: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=message)
    return fig


def create_category_pie_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Render spending share per category as a donut chart.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Output of :func:`aggregation.category_breakdown` (``Category`` and
        ``Amount`` columns).
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart of category totals.
    """
    if breakdown.empty:
        return _empty_figure()
    fig = px.pie(breakdown, names="Category", values="Amount", hole=0.4)
    fig.update_traces(textposition="inside", textinfo="percent+label")
    fig.update_layout(title=title or "Spending by category")
    return fig


def create_budget_chart(status: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars of limit versus spent, coloured by budget status.

    Parameters
    ----------
    status : pandas.DataFrame
        Output of :func:`aggregation.budget_status`.
    title : str, optional
        Chart title.
    """
    if status.empty:
        return _empty_figure("No budgets to display")
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Budget", x=status["Category"], y=status["Limit"], marker_color="#90a4ae"))
    fig.add_trace(
        go.Bar(
            name="Spent",
            x=status["Category"],
            y=status["Spent"],
            marker_color=status["Status"].map(STATUS_COLORS).tolist(),
        )
    )
    fig.update_layout(
        title=title or "Budget vs actual spending",
        barmode="group",
        yaxis_title=f"Amount ({config.CURRENCY_SYMBOL})",
    )
    return fig


def create_trend_chart(totals: pd.DataFrame, x: str, title: str | None = None) -> go.Figure:
    """Bar chart of spending over time.

    ``totals`` is :func:`aggregation.monthly_totals` (``x="Month"``) or
    :func:`aggregation.daily_totals` (``x="Date"``).
    """
    if totals.empty:
        return _empty_figure()
    fig = px.bar(totals, x=x, y="Amount")
    fig.update_layout(
        title=title or f"Spending by {x.lower()}",
        xaxis_title=x,
        yaxis_title=f"Amount ({config.CURRENCY_SYMBOL})",
    )
    return fig
