from datetime import datetime

from expense_dashboard.aggregation import budget_status
from expense_dashboard.formatting import (
    CATEGORY_COLORS,
    category_color,
    escape_dollar_for_markdown,
    format_budget_message,
    format_currency,
    format_long_date,
    format_percent_used,
)
from expense_dashboard.models import Category


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(1234.5, include_sign=False) == "1,234.50"


def test_escape_dollar_for_markdown():
    assert escape_dollar_for_markdown(85.45) == "\\$85.45"


def test_budget_messages():
    assert format_budget_message(budget_status(1200, 2000)) == "40% under budget"
    assert format_budget_message(budget_status(2500, 2000)) == "25% over budget"
    assert format_percent_used(budget_status(2500, 2000)) == "100% used"


def test_category_colors_cover_every_category():
    assert set(CATEGORY_COLORS) == set(Category)
    assert category_color("Food") == "#FF6384"
    assert category_color("Unknown") == CATEGORY_COLORS[Category.OTHER]


def test_format_long_date():
    assert format_long_date(datetime(2024, 5, 5)) == "Sunday, May 5"
