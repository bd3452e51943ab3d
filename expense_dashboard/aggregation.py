"""Derived aggregates for the expense dashboard.

Every function here is a pure function of the expense list it is given
(plus filter criteria, a budget cap or a reference time).  Nothing reads
the clock or mutates its input, so the same arguments always produce the
same result and the functions can be unit tested without a user
interface.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

import pandas as pd

from .config import ALL_CATEGORIES, TRAILING_WEEK_DAYS
from .models import Category, CategoryFilter, Expense

FRAME_COLUMNS = ["id", "Title", "Category", "Date", "Amount"]

# Progress bar thresholds on budget utilization
WARNING_UTILIZATION = 0.7
CRITICAL_UTILIZATION = 1.0


class DailySpend(NamedTuple):
    label: str
    amount: float
    day: date


@dataclass(frozen=True)
class BudgetStatus:
    total: float
    cap: float
    utilization: float
    percent_used: float
    percent_difference: float
    over_budget: bool
    level: str


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


def total_spend(expenses: Iterable[Expense]) -> float:
    """Sum of all amounts; ``0.0`` for an empty list."""
    return float(sum(expense.amount for expense in expenses))


def category_totals(expenses: Iterable[Expense]) -> Dict[Category, float]:
    """Sum amounts per category.

    Categories without expenses are absent.  Keys appear in the order the
    category first occurs in ``expenses``.
    """
    totals: Dict[Category, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return totals


def category_shares(expenses: Sequence[Expense]) -> Dict[Category, float]:
    """Percentage of total spend per category, in :func:`category_totals` order."""
    totals = category_totals(expenses)
    overall = sum(totals.values())
    if overall <= 0:
        return {}
    return {category: value / overall * 100 for category, value in totals.items()}


def top_category(expenses: Sequence[Expense]) -> Optional[Category]:
    """Category with the largest total; ties go to the first one seen."""
    totals = category_totals(expenses)
    if not totals:
        return None
    best: Optional[Category] = None
    for category, value in totals.items():
        if best is None or value > totals[best]:
            best = category
    return best


def distinct_category_count(expenses: Iterable[Expense]) -> int:
    return len({expense.category for expense in expenses})


def highest_expense(expenses: Iterable[Expense]) -> Optional[Expense]:
    """Record with the largest amount, first occurrence winning ties."""
    highest: Optional[Expense] = None
    for expense in expenses:
        if highest is None or expense.amount > highest.amount:
            highest = expense
    return highest


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------


def trailing_week_series(expenses: Iterable[Expense], reference: datetime) -> List[DailySpend]:
    """Per-day spend for the seven calendar days ending at ``reference``.

    Entries run oldest first and always number seven, each starting at
    zero.  Buckets are keyed by calendar date and labelled with the short
    weekday name, so no two days share a bucket.  Expenses dated after
    ``reference`` are ignored.  Expense times are converted to the
    timezone convention of ``reference`` (naive local or aware) before
    comparing.
    """
    end_day = reference.date()
    days = [end_day - timedelta(days=offset) for offset in range(TRAILING_WEEK_DAYS - 1, -1, -1)]
    buckets: Dict[date, float] = {day: 0.0 for day in days}

    for expense in expenses:
        occurred_on = _align_timezone(expense.occurred_on, reference)
        if occurred_on > reference:
            continue
        day = occurred_on.date()
        if day in buckets:
            buckets[day] += expense.amount

    return [DailySpend(day.strftime("%a"), buckets[day], day) for day in days]


def _align_timezone(moment: datetime, reference: datetime) -> datetime:
    if reference.tzinfo is None:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone().replace(tzinfo=None)
    # Naive moments are read as local time
    return moment.astimezone(reference.tzinfo)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def filter_expenses(
    expenses: Iterable[Expense],
    search_term: str = "",
    category: CategoryFilter = ALL_CATEGORIES,
) -> List[Expense]:
    """Records whose title contains ``search_term`` (case-insensitive) and
    whose category matches ``category``.

    ``"All"`` disables the category constraint.  Order is preserved.
    """
    needle = (search_term or "").lower()
    wanted = None if category == ALL_CATEGORIES else Category.parse(category)
    if category != ALL_CATEGORIES and wanted is None:
        raise ValueError(f"Unknown category filter '{category}'")
    return [
        expense
        for expense in expenses
        if needle in expense.title.lower() and (wanted is None or expense.category == wanted)
    ]


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------


def budget_utilization(total: float, cap: float) -> float:
    """Ratio of spend to cap (``1.25`` means 25% over budget).

    Raises
    ------
    ValueError
        If ``cap`` is not a positive finite number.
    """
    if not math.isfinite(cap) or cap <= 0:
        raise ValueError(f"Budget cap must be positive, got {cap}")
    return total / cap


def budget_status(total: float, cap: float) -> BudgetStatus:
    """Everything the budget card and progress bar display."""
    utilization = budget_utilization(total, cap)
    over_budget = total >= cap
    if utilization < WARNING_UTILIZATION:
        level = "ok"
    elif utilization < CRITICAL_UTILIZATION:
        level = "warning"
    else:
        level = "critical"
    return BudgetStatus(
        total=total,
        cap=cap,
        utilization=utilization,
        percent_used=min(100.0, utilization * 100),
        percent_difference=abs(cap - total) / cap * 100,
        over_budget=over_budget,
        level=level,
    )


# ---------------------------------------------------------------------------
# Tabular view
# ---------------------------------------------------------------------------


def expenses_to_frame(expenses: Sequence[Expense]) -> pd.DataFrame:
    """Expense table in display order."""
    if not expenses:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    df = pd.DataFrame(
        [
            {
                "id": expense.id,
                "Title": expense.title,
                "Category": expense.category.value,
                "Date": pd.Timestamp(expense.occurred_on),
                "Amount": float(expense.amount),
            }
            for expense in expenses
        ],
        columns=FRAME_COLUMNS,
    )
    return df


def category_totals_series(expenses: Sequence[Expense]) -> pd.Series:
    """:func:`category_totals` as a Series indexed by category name."""
    totals = category_totals(expenses)
    return pd.Series(
        list(totals.values()),
        index=pd.Index([category.value for category in totals], name="Category"),
        dtype=float,
        name="Amount",
    )


def weekly_series_frame(series: Sequence[DailySpend]) -> pd.DataFrame:
    """:func:`trailing_week_series` output as a DataFrame for charting."""
    return pd.DataFrame(
        [{"Day": entry.label, "Date": pd.Timestamp(entry.day), "Amount": entry.amount} for entry in series],
        columns=["Day", "Date", "Amount"],
    )
