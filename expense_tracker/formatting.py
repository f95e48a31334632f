"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

import math
from typing import Optional, Union

from . import config


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string (e.g., "₹1,234.56" or "1,234.56").
        Negative amounts put the minus before the symbol.

    Example:
        >>> format_currency(1234.56)
        '₹1,234.56'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = '-' if amount < 0 else ''
    return f"{prefix}{config.CURRENCY_SYMBOL}{formatted}" if include_sign else f"{prefix}{formatted}"


def format_percent(value: Optional[float], digits: int = 1) -> str:
    """Format a percentage, showing ``n/a`` for missing or infinite values."""
    if value is None or (isinstance(value, float) and not math.isfinite(value)):
        return 'n/a'
    return f"{value:.{digits}f}%"


def escape_currency_for_markdown(amount: float) -> str:
    """Format an amount for ``st.markdown`` so ``$`` isn't read as LaTeX."""
    return format_currency(amount).replace("$", "\\$")
