"""Formatting utilities for currency, dates and category display."""

from __future__ import annotations

from datetime import datetime
from typing import Union

from .aggregation import BudgetStatus
from .models import Category

CATEGORY_COLORS = {
    Category.FOOD: "#FF6384",
    Category.TRANSPORT: "#36A2EB",
    Category.HOUSING: "#FFCE56",
    Category.ENTERTAINMENT: "#4BC0C0",
    Category.UTILITIES: "#9966FF",
    Category.SHOPPING: "#FF9F40",
    Category.HEALTH: "#6DD48C",
    Category.OTHER: "#C9CBCF",
}
FALLBACK_COLOR = CATEGORY_COLORS[Category.OTHER]

# Progress bar colour per budget level
PROGRESS_COLORS = {
    "ok": "#22c55e",
    "warning": "#eab308",
    "critical": "#ef4444",
}


def category_color(category: Union[Category, str]) -> str:
    """Hex colour for ``category``; unknown names get the "Other" colour."""
    parsed = Category.parse(category)
    return CATEGORY_COLORS.get(parsed, FALLBACK_COLOR)


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX delimiter, so the sign is
    escaped.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\\\$1,234.56'
    """
    return f"${amount:,.2f}".replace("$", "\\$")


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{amount:,.2f}"
    return f"${formatted}" if include_sign else formatted


def format_budget_message(status: BudgetStatus) -> str:
    """``"40% under budget"`` or ``"25% over budget"``, rounded to whole percent."""
    direction = "over" if status.over_budget else "under"
    return f"{status.percent_difference:.0f}% {direction} budget"


def format_percent_used(status: BudgetStatus) -> str:
    return f"{status.percent_used:.0f}% used"


def format_long_date(moment: datetime) -> str:
    """``Saturday, October 17`` style heading date."""
    return f"{moment:%A, %B} {moment.day}"
