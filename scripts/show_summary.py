#!/usr/bin/env python3
"""Print the dashboard aggregates for the seed expenses to the terminal."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_dashboard import aggregation as agg
from expense_dashboard import session
from expense_dashboard.config import ALL_CATEGORIES, DEFAULT_MONTHLY_CAP, configure_logging
from expense_dashboard.formatting import format_budget_message, format_currency
from expense_dashboard.models import CATEGORY_FILTER_OPTIONS
from expense_dashboard.seed import initial_expenses


def main(cap: float, search: str, category: str) -> int:
    now = datetime.now()
    state = session.new_state(initial_expenses(now), monthly_cap=cap)
    state = session.set_category_filter(session.set_search_term(state, search), category)
    summary = session.summarize(state, now)

    print(f"Total spent: {format_currency(summary['total'])} of {format_currency(cap)}")
    print(f"Budget: {format_budget_message(summary['budget'])}")
    highest = summary['highest_expense']
    if highest is not None:
        print(f"Highest expense: {highest.title} ({format_currency(highest.amount)})")

    print("\nBy category:")
    print(agg.category_totals_series(state.expenses).to_string())

    print("\nLast 7 days:")
    print(agg.weekly_series_frame(summary['weekly_series']).to_string(index=False))

    print(f"\nMatching expenses ({len(summary['visible_expenses'])}):")
    frame = agg.expenses_to_frame(summary['visible_expenses'])
    if frame.empty:
        print("No expenses found.")
    else:
        print(frame.drop(columns=['id']).to_string(index=False))
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show a summary of the seeded expense dashboard.')
    parser.add_argument('--cap', type=float, default=DEFAULT_MONTHLY_CAP, help='Monthly budget cap')
    parser.add_argument('--search', default='', help='Case-insensitive title filter')
    parser.add_argument('--category', default=ALL_CATEGORIES, choices=CATEGORY_FILTER_OPTIONS,
                        help='Category filter')
    args = parser.parse_args()
    if args.cap <= 0:
        parser.error('--cap must be positive')
    configure_logging()
    raise SystemExit(main(cap=args.cap, search=args.search, category=args.category))
