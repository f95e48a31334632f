"""Helpers shared by the tab renderers."""

from __future__ import annotations

import streamlit as st

from ..aggregation import WINDOW_PRESETS, DateWindow, resolve_window
from ..state import AppState


def rerun() -> None:
    rerun_fn = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun', None)
    if rerun_fn:
        rerun_fn()


def show_notifications(state: AppState) -> None:
    """Surface persistence problems without interrupting the session."""
    for message in state.drain_notifications():
        st.warning(f"⚠️ {message}")


def window_selector(label: str, key: str, default: str = 'This month') -> DateWindow:
    presets = list(WINDOW_PRESETS)
    choice = st.selectbox(label, presets, index=presets.index(default), key=key)
    return resolve_window(choice)
