"""Expense Tracker Streamlit application.

Builds the page, loads the session's state once and renders the four
tabs: Add, Expenses, Budget and Reports.
"""

from __future__ import annotations

import logging

import streamlit as st
from streamlit.errors import StreamlitAPIException

from . import config
from .logging_config import configure_logging
from .state import AppState, get_app_state
from .ui import (
    render_add_expense_tab,
    render_budget_tab,
    render_expense_list_tab,
    render_reports_tab,
)
from .ui.common import show_notifications

logger = logging.getLogger(__name__)

_LOGGING_CONFIGURED = False

TABS = ["➕ Add", "🧾 Expenses", "🎯 Budget", "📊 Reports"]


def setup_page_config() -> None:
    try:
        st.set_page_config(page_title="Expense Tracker", page_icon="💰", layout="centered")
    except StreamlitAPIException:
        # Already configured upstream; avoid raising to keep reruns smooth.
        pass


def render_header() -> None:
    st.title("💰 Expense Tracker")
    st.caption(
        f"Track your expenses in {config.CURRENCY_CODE} • Device-specific storage "
        "(only you can view the expenses added on this device)"
    )


def render_app(state: AppState) -> None:
    render_header()
    show_notifications(state)

    add_tab, list_tab, budget_tab, reports_tab = st.tabs(TABS)
    with add_tab:
        render_add_expense_tab(state)
    with list_tab:
        render_expense_list_tab(state)
    with budget_tab:
        render_budget_tab(state)
    with reports_tab:
        render_reports_tab(state)

    # Writes that failed during this run
    show_notifications(state)


def main() -> None:
    global _LOGGING_CONFIGURED
    setup_page_config()
    if not _LOGGING_CONFIGURED:
        configure_logging()
        _LOGGING_CONFIGURED = True
    render_app(get_app_state(st.session_state))
