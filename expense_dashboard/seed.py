"""Mock expense data used to populate a fresh dashboard session."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List

from .models import Category, Expense

# (id, title, amount, days before now, category)
SEED_ROWS = [
    ("1", "Groceries", 85.45, 2, Category.FOOD),
    ("2", "Electricity bill", 120.30, 5, Category.UTILITIES),
    ("3", "Movie tickets", 28.50, 3, Category.ENTERTAINMENT),
    ("4", "Gas", 45.00, 1, Category.TRANSPORT),
    ("5", "Rent", 1200.00, 7, Category.HOUSING),
    ("6", "Restaurant", 68.25, 4, Category.FOOD),
    ("7", "New shoes", 89.99, 6, Category.SHOPPING),
    ("8", "Doctor visit", 50.00, 10, Category.HEALTH),
]


def initial_expenses(now: datetime) -> List[Expense]:
    """Return the seed list with dates relative to ``now``."""
    return [
        Expense(
            id=expense_id,
            title=title,
            amount=amount,
            occurred_on=now - timedelta(days=days_ago),
            category=category,
        )
        for expense_id, title, amount, days_ago, category in SEED_ROWS
    ]
