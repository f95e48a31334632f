"""Configuration management for the expense tracker.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Device-local storage directory
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Persistence entry names
EXPENSES_KEY = "expenses"
BUDGETS_KEY = "budgets"

CURRENCY_CODE = "INR"
CURRENCY_SYMBOL = os.getenv("EXPENSE_TRACKER_CURRENCY", "₹")

# Budget usage ratios at which a category turns "near" and "over"
NEAR_THRESHOLD = float(os.getenv("EXPENSE_TRACKER_NEAR_THRESHOLD", "0.8"))
OVER_THRESHOLD = float(os.getenv("EXPENSE_TRACKER_OVER_THRESHOLD", "1.0"))

LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()

DEFAULT_CATEGORIES = [
    "Food",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Other",
]


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def get_data_dir() -> str:
    """Get the data directory as a string."""
    return str(DATA_DIR)
