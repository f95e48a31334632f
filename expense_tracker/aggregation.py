"""Spending aggregation for budgets and reports.

Every function here is pure: it takes the current expense list (and budget
mapping where relevant) and returns freshly computed totals. Nothing is
cached, so results always reflect the store state they were given.

Input is assumed valid; amounts are checked in :mod:`validation` before an
expense can exist.
"""

from __future__ import annotations

import calendar
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from . import config
from .models import Expense

STATUS_UNDER = 'under'
STATUS_NEAR = 'near'
STATUS_OVER = 'over'

EXPENSE_COLUMNS = ['id', 'amount', 'category', 'description', 'date', 'created_at']
BUDGET_STATUS_COLUMNS = ['Category', 'Limit', 'Spent', 'Remaining', 'Percent Used', 'Status']


# ---------------------------------------------------------------------------
# Date windows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range; an open end means unbounded on that side."""
    start: Optional[date] = None
    end: Optional[date] = None
    label: str = 'All time'

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


def current_month(today: Optional[date] = None) -> DateWindow:
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return DateWindow(
        today.replace(day=1),
        today.replace(day=last_day),
        label=today.strftime('%B %Y'),
    )


def previous_month(today: Optional[date] = None) -> DateWindow:
    today = today or date.today()
    return current_month(today.replace(day=1) - timedelta(days=1))


def last_n_days(days: int, today: Optional[date] = None) -> DateWindow:
    if days < 1:
        raise ValueError("days must be at least 1")
    today = today or date.today()
    return DateWindow(today - timedelta(days=days - 1), today, label=f'Last {days} days')


def current_year(today: Optional[date] = None) -> DateWindow:
    today = today or date.today()
    return DateWindow(date(today.year, 1, 1), date(today.year, 12, 31), label=str(today.year))


def all_time() -> DateWindow:
    return DateWindow()


WINDOW_PRESETS: Dict[str, Callable[[Optional[date]], DateWindow]] = {
    'This month': current_month,
    'Last month': previous_month,
    'Last 30 days': lambda today=None: last_n_days(30, today),
    'This year': current_year,
    'All time': lambda today=None: all_time(),
}


def resolve_window(preset: str, today: Optional[date] = None) -> DateWindow:
    """Look up a window preset by its display name.

    Raises:
        KeyError: If the preset name is unknown
    """
    return WINDOW_PRESETS[preset](today)


# ---------------------------------------------------------------------------
# Budget thresholds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BudgetThresholds:
    """Usage ratios separating under / near / over.

    ``near`` and ``over`` are both inclusive on the near side: a ratio equal
    to ``near`` is near, a ratio equal to ``over`` is still near.
    """
    near: float = config.NEAR_THRESHOLD
    over: float = config.OVER_THRESHOLD

    def __post_init__(self) -> None:
        if not 0 <= self.near <= self.over:
            raise ValueError(f"Invalid thresholds near={self.near} over={self.over}")


DEFAULT_THRESHOLDS = BudgetThresholds()


def usage_ratio(spent: float, limit: float) -> float:
    """Fraction of the limit used; a zero limit is infinitely used once anything is spent."""
    if limit > 0:
        return spent / limit
    return float('inf') if spent > 0 else 0.0


def classify_usage(spent: float, limit: float, thresholds: BudgetThresholds = DEFAULT_THRESHOLDS) -> str:
    """Classify spending against a limit as under, near or over.

    Example:
        >>> classify_usage(850, 1000)
        'near'
        >>> classify_usage(1100, 1000)
        'over'
    """
    ratio = usage_ratio(spent, limit)
    if ratio > thresholds.over:
        return STATUS_OVER
    if ratio >= thresholds.near:
        return STATUS_NEAR
    return STATUS_UNDER


# ---------------------------------------------------------------------------
# Frames and filters
# ---------------------------------------------------------------------------

def expenses_to_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Tabulate expenses with a datetime ``date`` column and float ``amount``."""
    rows = [asdict(expense) for expense in expenses]
    frame = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    frame['amount'] = pd.to_numeric(frame['amount']).astype(float)
    frame['date'] = pd.to_datetime(frame['date'])
    return frame


def filter_by_window(expenses: Iterable[Expense], window: Optional[DateWindow]) -> List[Expense]:
    if window is None:
        return list(expenses)
    return [expense for expense in expenses if window.contains(expense.date)]


def filter_expenses(
    expenses: Iterable[Expense],
    category: Optional[str] = None,
    text: Optional[str] = None,
    window: Optional[DateWindow] = None,
) -> List[Expense]:
    """Narrow an expense list by category, free text and date window.

    Text matches description or category, case-insensitively.
    """
    needle = text.strip().lower() if text else ''
    selected = []
    for expense in filter_by_window(expenses, window):
        if category and expense.category != category:
            continue
        if needle and needle not in expense.description.lower() and needle not in expense.category.lower():
            continue
        selected.append(expense)
    return selected


_SORT_KEYS: Dict[str, Callable[[Expense], object]] = {
    'date': lambda e: (e.date, e.created_at or ''),
    'amount': lambda e: e.amount,
    'category': lambda e: e.category.lower(),
}


def sort_expenses(expenses: Iterable[Expense], by: str = 'date', descending: bool = True) -> List[Expense]:
    """Sort for display; ties keep their insertion order."""
    if by not in _SORT_KEYS:
        raise ValueError(f"Unknown sort key '{by}', expected one of {sorted(_SORT_KEYS)}")
    return sorted(expenses, key=_SORT_KEYS[by], reverse=descending)


def known_categories(
    expenses: Iterable[Expense],
    budgets: Optional[Dict[str, float]] = None,
    defaults: Sequence[str] = (),
) -> List[str]:
    """Categories from defaults, budgets and expenses, without duplicates."""
    seen: Dict[str, None] = dict.fromkeys(defaults)
    seen.update(dict.fromkeys(sorted(budgets or {})))
    seen.update(dict.fromkeys(sorted({e.category for e in expenses})))
    return list(seen)


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

def category_totals(
    expenses: Iterable[Expense],
    window: Optional[DateWindow] = None,
    categories: Optional[Iterable[str]] = None,
) -> Dict[str, float]:
    """Sum amounts per category.

    Args:
        expenses: Expenses to aggregate
        window: Optional date window to restrict to
        categories: Categories that must appear in the result, with 0.0
                    when nothing was spent in them

    Returns:
        Dictionary mapping category names to totals rounded to cents
    """
    totals: Dict[str, float] = {category: 0.0 for category in categories or []}
    frame = expenses_to_frame(filter_by_window(expenses, window))
    if frame.empty:
        return totals
    grouped = frame.groupby('category', sort=True)['amount'].sum()
    for category, amount in grouped.items():
        totals[category] = round(float(amount), 2)
    return totals


def budget_status(
    expenses: Iterable[Expense],
    budgets: Dict[str, float],
    window: Optional[DateWindow] = None,
    thresholds: BudgetThresholds = DEFAULT_THRESHOLDS,
) -> pd.DataFrame:
    """Spending against each budgeted category.

    Returns:
        DataFrame with one row per budget, in budget order.
        Columns: Category, Limit, Spent, Remaining, Percent Used, Status.
        ``Percent Used`` is NaN for a zero limit.
    """
    if not budgets:
        return pd.DataFrame(columns=BUDGET_STATUS_COLUMNS)

    spent_by_category = category_totals(expenses, window)
    rows = []
    for category, limit in budgets.items():
        spent = spent_by_category.get(category, 0.0)
        percent_used = (spent / limit * 100.0) if limit > 0 else float('nan')
        rows.append({
            'Category': category,
            'Limit': float(limit),
            'Spent': spent,
            'Remaining': round(limit - spent, 2),
            'Percent Used': percent_used,
            'Status': classify_usage(spent, limit, thresholds),
        })
    return pd.DataFrame(rows, columns=BUDGET_STATUS_COLUMNS)


@dataclass(frozen=True)
class ReportSummary:
    """Derived totals for one window and optionally one category."""
    window: DateWindow
    category: Optional[str]
    total_spent: float
    expense_count: int
    limit: Optional[float] = None
    remaining: Optional[float] = None
    percent_used: Optional[float] = None
    status: Optional[str] = None
    category_totals: Dict[str, float] = field(default_factory=dict)

    @property
    def average_expense(self) -> float:
        return round(self.total_spent / self.expense_count, 2) if self.expense_count else 0.0


def report_summary(
    expenses: Iterable[Expense],
    budgets: Optional[Dict[str, float]] = None,
    window: Optional[DateWindow] = None,
    category: Optional[str] = None,
    thresholds: BudgetThresholds = DEFAULT_THRESHOLDS,
) -> ReportSummary:
    """Summarize spending in a window, overall or for one category.

    Without a category the limit is the sum of all budgets. Every known
    category (spent in or budgeted) appears in ``category_totals``.
    """
    expenses = list(expenses)
    budgets = budgets or {}
    window = window or all_time()

    scoped = filter_expenses(expenses, category=category, window=window)
    names = known_categories(expenses, budgets)
    if category:
        names = [category]
    totals = category_totals(scoped, categories=names)
    total_spent = round(sum(e.amount for e in scoped), 2)

    if category:
        limit = budgets.get(category)
    else:
        limit = round(sum(budgets.values()), 2) if budgets else None

    remaining = percent_used = status = None
    if limit is not None:
        remaining = round(limit - total_spent, 2)
        percent_used = (total_spent / limit * 100.0) if limit > 0 else None
        status = classify_usage(total_spent, limit, thresholds)

    return ReportSummary(
        window=window,
        category=category,
        total_spent=total_spent,
        expense_count=len(scoped),
        limit=limit,
        remaining=remaining,
        percent_used=percent_used,
        status=status,
        category_totals=totals,
    )


# ---------------------------------------------------------------------------
# Report tables
# ---------------------------------------------------------------------------

def category_breakdown(expenses: Iterable[Expense], window: Optional[DateWindow] = None) -> pd.DataFrame:
    """Totals per category with their share of all spending, largest first.

    Columns: Category, Amount, Count, Share (percent of the window's total).
    """
    frame = expenses_to_frame(filter_by_window(expenses, window))
    if frame.empty:
        return pd.DataFrame(columns=['Category', 'Amount', 'Count', 'Share'])

    grouped = (
        frame.groupby('category')
        .agg(Amount=('amount', 'sum'), Count=('amount', 'size'))
        .reset_index()
        .rename(columns={'category': 'Category'})
    )
    total = grouped['Amount'].sum()
    grouped['Amount'] = grouped['Amount'].round(2)
    grouped['Share'] = (grouped['Amount'] / total * 100.0).round(1) if total else 0.0
    return grouped.sort_values(['Amount', 'Category'], ascending=[False, True]).reset_index(drop=True)


def monthly_totals(expenses: Iterable[Expense], window: Optional[DateWindow] = None) -> pd.DataFrame:
    """Spending per calendar month. Columns: Month (``YYYY-MM``), Amount."""
    frame = expenses_to_frame(filter_by_window(expenses, window))
    if frame.empty:
        return pd.DataFrame(columns=['Month', 'Amount'])
    frame['Month'] = frame['date'].dt.to_period('M')
    grouped = frame.groupby('Month')['amount'].sum().round(2).reset_index()
    grouped['Month'] = grouped['Month'].astype(str)
    return grouped.rename(columns={'amount': 'Amount'})


def daily_totals(expenses: Iterable[Expense], window: Optional[DateWindow] = None) -> pd.DataFrame:
    """Spending per day with expenses. Columns: Date, Amount."""
    frame = expenses_to_frame(filter_by_window(expenses, window))
    if frame.empty:
        return pd.DataFrame(columns=['Date', 'Amount'])
    grouped = frame.groupby(frame['date'].dt.date)['amount'].sum().round(2)
    return pd.DataFrame({'Date': list(grouped.index), 'Amount': grouped.to_numpy()})


def largest_expenses(
    expenses: Iterable[Expense],
    n: int = 5,
    window: Optional[DateWindow] = None,
) -> List[Expense]:
    return sort_expenses(filter_by_window(expenses, window), by='amount', descending=True)[:n]
