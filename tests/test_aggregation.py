"""Unit tests for expense_dashboard.aggregation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from expense_dashboard import aggregation as agg
from expense_dashboard.models import Category, Expense

NOW = datetime(2024, 5, 15, 12, 0)  # a Wednesday


def make(expense_id, title, amount, category, days_ago=0):
    return Expense(
        id=expense_id,
        title=title,
        amount=amount,
        occurred_on=NOW - timedelta(days=days_ago),
        category=category,
    )


def sample_expenses():
    return [
        make("1", "Lunch", 10, Category.FOOD),
        make("2", "Snacks", 5, Category.FOOD, days_ago=1),
        make("3", "Train", 20, Category.TRANSPORT, days_ago=2),
    ]


def test_total_spend() -> None:
    assert agg.total_spend(sample_expenses()) == 35
    assert agg.total_spend([]) == 0


def test_category_totals_example() -> None:
    totals = agg.category_totals(sample_expenses())
    assert totals == {Category.FOOD: 15, Category.TRANSPORT: 20}


def test_category_totals_sum_matches_total() -> None:
    expenses = sample_expenses() + [make("4", "Shoes", 89.99, Category.SHOPPING), make("5", "Pizza", 0.1, Category.FOOD)]
    assert sum(agg.category_totals(expenses).values()) == pytest.approx(agg.total_spend(expenses))


def test_category_totals_first_occurrence_order() -> None:
    expenses = [
        make("1", "Bus", 3, Category.TRANSPORT),
        make("2", "Lunch", 10, Category.FOOD),
        make("3", "Taxi", 12, Category.TRANSPORT),
    ]
    assert list(agg.category_totals(expenses)) == [Category.TRANSPORT, Category.FOOD]
    assert Category.HOUSING not in agg.category_totals(expenses)


def test_highest_expense() -> None:
    expenses = sample_expenses()
    assert agg.highest_expense(expenses) is expenses[2]
    assert agg.highest_expense([]) is None


def test_highest_expense_tie_keeps_first() -> None:
    first = make("1", "Rent", 100, Category.HOUSING)
    second = make("2", "Bike", 100, Category.TRANSPORT)
    assert agg.highest_expense([first, second]) is first


def test_trailing_week_series_empty_list() -> None:
    series = agg.trailing_week_series([], NOW)
    assert len(series) == 7
    assert all(entry.amount == 0 for entry in series)
    assert series[-1].day == NOW.date()
    assert series[-1].label == "Wed"
    assert series[0].day == (NOW - timedelta(days=6)).date()


def test_trailing_week_series_buckets_by_date() -> None:
    expenses = [
        make("1", "Today", 10, Category.FOOD),
        make("2", "Yesterday", 4, Category.FOOD, days_ago=1),
        make("3", "Also yesterday", 6, Category.OTHER, days_ago=1),
        # Same weekday as today, one week earlier: outside the window
        make("4", "Last week", 50, Category.FOOD, days_ago=7),
    ]
    series = agg.trailing_week_series(expenses, NOW)
    assert len(series) == 7
    assert series[-1].amount == 10
    assert series[-2].amount == 10
    assert sum(entry.amount for entry in series) == 20
    assert len({entry.label for entry in series}) == 7


def test_trailing_week_series_ignores_future_expenses() -> None:
    future = Expense(id="1", title="Later", amount=5, occurred_on=NOW + timedelta(hours=1), category=Category.FOOD)
    series = agg.trailing_week_series([future], NOW)
    assert sum(entry.amount for entry in series) == 0


def test_filter_expenses_identity() -> None:
    expenses = sample_expenses()
    assert agg.filter_expenses(expenses, "", "All") == expenses


def test_filter_expenses_search_is_case_insensitive() -> None:
    expenses = [
        make("1", "Groceries", 85.45, Category.FOOD),
        make("2", "Gas", 45, Category.TRANSPORT),
        make("3", "Rent", 1200, Category.HOUSING),
    ]
    result = agg.filter_expenses(expenses, "gro", "All")
    assert [expense.title for expense in result] == ["Groceries"]
    assert agg.filter_expenses(expenses, "GAS", "All") == [expenses[1]]


def test_filter_expenses_category_and_search() -> None:
    expenses = sample_expenses()
    assert agg.filter_expenses(expenses, "", Category.FOOD) == expenses[:2]
    assert agg.filter_expenses(expenses, "", "Food") == expenses[:2]
    assert agg.filter_expenses(expenses, "snack", "Food") == [expenses[1]]
    assert agg.filter_expenses(expenses, "snack", Category.TRANSPORT) == []


def test_filter_expenses_is_idempotent() -> None:
    expenses = sample_expenses()
    once = agg.filter_expenses(expenses, "n", "Food")
    assert agg.filter_expenses(once, "n", "Food") == once


def test_filter_expenses_rejects_unknown_category() -> None:
    with pytest.raises(ValueError):
        agg.filter_expenses(sample_expenses(), "", "Groceries")


def test_budget_utilization() -> None:
    assert agg.budget_utilization(2500, 2000) == pytest.approx(1.25)
    with pytest.raises(ValueError):
        agg.budget_utilization(100, 0)


def test_budget_status_levels() -> None:
    under = agg.budget_status(500, 2000)
    assert under.level == "ok"
    assert not under.over_budget
    assert under.percent_difference == pytest.approx(75)

    assert agg.budget_status(1500, 2000).level == "warning"

    over = agg.budget_status(2500, 2000)
    assert over.level == "critical"
    assert over.over_budget
    assert over.percent_used == 100
    assert over.percent_difference == pytest.approx(25)


def test_top_category_and_counts() -> None:
    expenses = sample_expenses()
    assert agg.top_category(expenses) == Category.TRANSPORT
    assert agg.top_category([]) is None
    assert agg.distinct_category_count(expenses) == 2
    shares = agg.category_shares(expenses)
    assert shares[Category.FOOD] == pytest.approx(15 / 35 * 100)
    assert sum(shares.values()) == pytest.approx(100)


def test_expenses_to_frame() -> None:
    frame = agg.expenses_to_frame(sample_expenses())
    assert list(frame.columns) == agg.FRAME_COLUMNS
    assert list(frame["Title"]) == ["Lunch", "Snacks", "Train"]
    assert frame["Amount"].sum() == 35

    empty = agg.expenses_to_frame([])
    assert empty.empty
    assert list(empty.columns) == agg.FRAME_COLUMNS


def test_category_totals_series() -> None:
    series = agg.category_totals_series(sample_expenses())
    assert list(series.index) == ["Food", "Transport"]
    assert series["Transport"] == 20


def test_budget_rejects_non_finite_cap() -> None:
    with pytest.raises(ValueError):
        agg.budget_utilization(100, float("nan"))
    with pytest.raises(ValueError):
        agg.budget_status(100, float("nan"))
    with pytest.raises(ValueError):
        agg.budget_utilization(100, float("inf"))


def test_trailing_week_accepts_aware_expense_with_naive_reference() -> None:
    aware = Expense(
        id="tz",
        title="Coffee",
        amount=4.0,
        occurred_on=(NOW - timedelta(days=3)).astimezone(timezone.utc),
        category=Category.FOOD,
    )
    series = agg.trailing_week_series([aware], NOW)
    assert sum(entry.amount for entry in series) == pytest.approx(4.0)
    assert series[3].amount == pytest.approx(4.0)


def test_trailing_week_accepts_naive_expenses_with_aware_reference() -> None:
    reference = NOW.astimezone(timezone.utc)
    series = agg.trailing_week_series(sample_expenses(), reference)
    assert len(series) == 7
    assert sum(entry.amount for entry in series) == pytest.approx(35.0)
