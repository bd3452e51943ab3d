"""Explicit dashboard state and the transitions applied to it.

The Streamlit page keeps a single :class:`DashboardState` in its session
and replaces it with the value returned by one of the functions below on
every user action.  None of them modify the state they are given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from . import aggregation as agg
from .config import ALL_CATEGORIES, DEFAULT_DARK_MODE, DEFAULT_MONTHLY_CAP
from .ledger import IdFactory, ValidationError, add_expense, new_expense_id, remove_expense
from .models import Category, Expense, ExpenseDraft


@dataclass(frozen=True)
class DashboardState:
    expenses: Tuple[Expense, ...] = ()
    search_term: str = ""
    selected_category: str = ALL_CATEGORIES
    monthly_cap: float = DEFAULT_MONTHLY_CAP
    show_add_form: bool = False
    dark_mode: bool = DEFAULT_DARK_MODE
    validation_errors: Dict[str, ValidationError] = field(default_factory=dict)


def new_state(expenses=(), **overrides: Any) -> DashboardState:
    state = replace(DashboardState(expenses=tuple(expenses)), **overrides)
    _check_cap(state.monthly_cap)
    return state


def submit_draft(
    state: DashboardState,
    draft: ExpenseDraft,
    now: datetime,
    id_factory: IdFactory = new_expense_id,
) -> Tuple[DashboardState, Optional[Expense]]:
    """Add ``draft`` to the list.

    On success the add form closes and previous errors are cleared.  On
    failure the list is unchanged, the form stays open and the errors are
    kept on the state for display.
    """
    result = add_expense(state.expenses, draft, now, id_factory=id_factory)
    if not result.ok:
        return replace(state, show_add_form=True, validation_errors=dict(result.errors)), None
    updated = replace(
        state,
        expenses=tuple(result.expenses),
        show_add_form=False,
        validation_errors={},
    )
    return updated, result.record


def delete_expense(state: DashboardState, expense_id: str) -> DashboardState:
    return replace(state, expenses=tuple(remove_expense(state.expenses, expense_id)))


def set_search_term(state: DashboardState, search_term: Optional[str]) -> DashboardState:
    return replace(state, search_term=search_term or "")


def set_category_filter(state: DashboardState, category) -> DashboardState:
    """Select a category to filter on, or ``"All"``.

    Raises ``ValueError`` for anything that is neither.
    """
    if category == ALL_CATEGORIES:
        return replace(state, selected_category=ALL_CATEGORIES)
    parsed = Category.parse(category)
    if parsed is None:
        raise ValueError(f"Unknown category filter '{category}'")
    return replace(state, selected_category=parsed.value)


def set_monthly_cap(state: DashboardState, cap: float) -> DashboardState:
    _check_cap(cap)
    return replace(state, monthly_cap=float(cap))


def toggle_add_form(state: DashboardState) -> DashboardState:
    # Closing the form discards stale field errors
    errors = state.validation_errors if not state.show_add_form else {}
    return replace(state, show_add_form=not state.show_add_form, validation_errors=errors)


def toggle_dark_mode(state: DashboardState) -> DashboardState:
    return replace(state, dark_mode=not state.dark_mode)


def visible_expenses(state: DashboardState) -> List[Expense]:
    return agg.filter_expenses(state.expenses, state.search_term, state.selected_category)


def summarize(state: DashboardState, now: datetime) -> Dict[str, Any]:
    """Compute every aggregate shown on the dashboard for ``state``."""
    expenses = state.expenses
    total = agg.total_spend(expenses)
    return {
        'total': total,
        'budget': agg.budget_status(total, state.monthly_cap),
        'category_totals': agg.category_totals(expenses),
        'category_shares': agg.category_shares(expenses),
        'top_category': agg.top_category(expenses),
        'category_count': agg.distinct_category_count(expenses),
        'highest_expense': agg.highest_expense(expenses),
        'weekly_series': agg.trailing_week_series(expenses, now),
        'visible_expenses': visible_expenses(state),
        'expense_count': len(expenses),
    }


def _check_cap(cap: float) -> None:
    if cap is None or not math.isfinite(cap) or cap <= 0:
        raise ValueError(f"Monthly cap must be positive, got {cap}")
