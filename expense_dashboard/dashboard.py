"""Streamlit app for the expense dashboard.

The page keeps one :class:`session.DashboardState` in
``st.session_state`` and replaces it on every user action.  All numbers
shown come from :mod:`aggregation` via :func:`session.summarize`; this
module only lays them out.

To run the dashboard from the command line::

    streamlit run expense_dashboard/dashboard.py

or use ``python run_dashboard.py`` from the project root.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Dict, List

import streamlit as st

# Conditional imports to support execution both as part of a package
# and directly as a script via ``streamlit run``.
if __package__:
    from . import session
    from . import visualization as viz
    from .config import DEFAULT_MONTHLY_CAP, configure_logging
    from .formatting import (
        PROGRESS_COLORS,
        category_color,
        escape_dollar_for_markdown,
        format_budget_message,
        format_currency,
        format_long_date,
        format_percent_used,
    )
    from .ledger import ValidationError
    from .models import CATEGORY_FILTER_OPTIONS, CATEGORY_NAMES, Expense, ExpenseDraft
    from .seed import initial_expenses
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from expense_dashboard import session  # type: ignore
    from expense_dashboard import visualization as viz  # type: ignore
    from expense_dashboard.config import DEFAULT_MONTHLY_CAP, configure_logging  # type: ignore
    from expense_dashboard.formatting import (  # type: ignore
        PROGRESS_COLORS,
        category_color,
        escape_dollar_for_markdown,
        format_budget_message,
        format_currency,
        format_long_date,
        format_percent_used,
    )
    from expense_dashboard.ledger import ValidationError  # type: ignore
    from expense_dashboard.models import CATEGORY_FILTER_OPTIONS, CATEGORY_NAMES, Expense, ExpenseDraft  # type: ignore
    from expense_dashboard.seed import initial_expenses  # type: ignore

logger = logging.getLogger(__name__)

STATE_KEY = "dashboard_state"

DARK_MODE_CSS = """
<style>
.stApp {
    background-color: #111827;
    color: #ffffff;
}
[data-testid="stMetric"] {
    background-color: #1f2937;
    padding: 1rem;
    border-radius: 0.75rem;
}
</style>
"""


def _rerun() -> None:
    rerun_fn = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun', None)
    if rerun_fn:
        rerun_fn()


def _ensure_state(now: datetime) -> None:
    if STATE_KEY in st.session_state:
        return
    st.session_state[STATE_KEY] = session.new_state(initial_expenses(now))
    logger.info("Seeded dashboard session with %d expenses", len(st.session_state[STATE_KEY].expenses))


def _get_state() -> session.DashboardState:
    return st.session_state[STATE_KEY]


def _set_state(state: session.DashboardState) -> None:
    st.session_state[STATE_KEY] = state


def _handle_delete(expense_id: str) -> None:
    _set_state(session.delete_expense(_get_state(), expense_id))


def _render_header(state: session.DashboardState, now: datetime) -> None:
    title_col, theme_col = st.columns([5, 1])
    with title_col:
        st.title("BudgetPro")
        st.markdown("Track your expenses with elegance")
        st.caption(f"📅 {format_long_date(now)}")
    with theme_col:
        label = "☀️ Light mode" if state.dark_mode else "🌙 Dark mode"
        if st.button(label, key="toggle_theme"):
            _set_state(session.toggle_dark_mode(state))
            _rerun()
    if state.dark_mode:
        st.markdown(DARK_MODE_CSS, unsafe_allow_html=True)


def _render_metric_cards(state: session.DashboardState, summary: Dict) -> None:
    budget = summary['budget']
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(
            label="💵 Total Spent",
            value=format_currency(summary['total']),
            delta=format_budget_message(budget),
            delta_color="inverse" if budget.over_budget else "normal",
        )

    with col2:
        st.metric(label="⚙️ Monthly Cap", value=format_currency(state.monthly_cap))
        st.progress(int(budget.percent_used))
        color = PROGRESS_COLORS[budget.level]
        st.markdown(
            f"<span style='color:{color}'>{format_percent_used(budget)}</span>",
            unsafe_allow_html=True,
        )

    with col3:
        highest: Expense = summary['highest_expense']
        if highest is None:
            st.metric(label="⬆️ Highest Expense", value="—")
            st.caption("No expenses yet")
        else:
            st.metric(label="⬆️ Highest Expense", value=format_currency(highest.amount))
            st.caption(highest.title)

    with col4:
        st.metric(label="🏷️ Categories", value=summary['category_count'])
        top = summary['top_category']
        st.caption(f"Most spent on: {top.value}" if top is not None else "No categories yet")


def _render_charts(state: session.DashboardState, summary: Dict) -> None:
    line_col, pie_col = st.columns(2)
    with line_col:
        st.subheader("Weekly Spending")
        st.plotly_chart(
            viz.create_weekly_spend_chart(summary['weekly_series'], dark_mode=state.dark_mode),
            use_container_width=True,
        )
    with pie_col:
        st.subheader("Expense Categories")
        if summary['category_totals']:
            st.plotly_chart(
                viz.create_category_pie_chart(summary['category_totals'], dark_mode=state.dark_mode),
                use_container_width=True,
            )
            legend = [
                f"<span style='color:{category_color(category)}'>●</span> {category.value} ({share:.0f}%)"
                for category, share in summary['category_shares'].items()
            ]
            st.markdown(" &nbsp; ".join(legend), unsafe_allow_html=True)
        else:
            st.info("No expense data available")


def _render_controls(state: session.DashboardState) -> session.DashboardState:
    search_col, category_col, cap_col, add_col = st.columns([3, 2, 2, 1])
    with search_col:
        search_term = st.text_input("🔍 Search expenses", key="search_term")
    with category_col:
        selected = st.selectbox(
            "Category",
            options=CATEGORY_FILTER_OPTIONS,
            key="category_filter",
        )
    with cap_col:
        cap = st.number_input(
            "Monthly cap",
            min_value=1.0,
            value=float(DEFAULT_MONTHLY_CAP),
            step=50.0,
            key="monthly_cap",
        )
    with add_col:
        st.write("")
        if st.button("➕ Add", key="toggle_add_form"):
            state = session.toggle_add_form(state)

    state = session.set_search_term(state, search_term)
    state = session.set_category_filter(state, selected)
    return session.set_monthly_cap(state, cap)


def _field_error(errors: Dict[str, ValidationError], name: str) -> None:
    error = errors.get(name)
    if error is not None:
        st.error(error.message)


def _render_add_form(state: session.DashboardState, now: datetime) -> session.DashboardState:
    if not state.show_add_form:
        return state

    st.subheader("Add New Expense")
    errors = state.validation_errors
    with st.form("add_expense_form"):
        col1, col2, col3 = st.columns(3)
        with col1:
            title = st.text_input("Title", placeholder="e.g., Groceries")
            _field_error(errors, 'title')
        with col2:
            amount = st.text_input("Amount", placeholder="0.00")
            _field_error(errors, 'amount')
        with col3:
            category = st.selectbox(
                "Category",
                options=[""] + CATEGORY_NAMES,
                format_func=lambda name: name or "Select category",
            )
            _field_error(errors, 'category')
        submitted = st.form_submit_button("Add Expense")

    if st.button("Cancel", key="cancel_add"):
        state = session.toggle_add_form(state)
        _set_state(state)
        _rerun()

    if submitted:
        state, record = session.submit_draft(
            state, ExpenseDraft(title=title, amount=amount, category=category), now
        )
        _set_state(state)
        if record is not None:
            st.toast(f"Added {record.title}")
        _rerun()
    return state


def _render_expense_table(state: session.DashboardState, visible: List[Expense]) -> None:
    st.subheader("Expenses")
    if not visible:
        st.info("No expenses found. Add a new expense or adjust your filters.")
        return

    header = st.columns([4, 2, 2, 2, 1])
    for col, label in zip(header, ["Title", "Category", "Date", "Amount", ""]):
        col.markdown(f"**{label}**")

    for expense in visible:
        row = st.columns([4, 2, 2, 2, 1])
        row[0].write(expense.title)
        row[1].markdown(
            f"<span style='color:{category_color(expense.category)}'>●</span> {expense.category.value}",
            unsafe_allow_html=True,
        )
        row[2].write(expense.occurred_on.strftime("%b %d, %Y"))
        row[3].markdown(escape_dollar_for_markdown(expense.amount))
        row[4].button(
            "🗑️",
            key=f"delete_{expense.id}",
            help="Delete expense",
            on_click=_handle_delete,
            args=(expense.id,),
        )


def main() -> None:
    """Entry point for the Streamlit app."""
    st.set_page_config(page_title="BudgetPro", page_icon="💵", layout="wide")
    configure_logging()
    now = datetime.now()
    _ensure_state(now)

    state = _get_state()
    _render_header(state, now)

    state = _render_controls(_get_state())
    _set_state(state)
    state = _render_add_form(state, now)

    summary = session.summarize(state, now)
    _render_metric_cards(state, summary)
    _render_charts(state, summary)
    _render_expense_table(state, summary['visible_expenses'])


if __name__ == "__main__":  # pragma: no cover
    main()
