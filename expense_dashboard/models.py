"""Core record types for the expense dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from .config import ALL_CATEGORIES, TITLE_MAX_LENGTH


class Category(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    HOUSING = "Housing"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Return the matching category, or ``None`` if ``value`` names none."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        return None


CATEGORY_NAMES = [category.value for category in Category]
CATEGORY_FILTER_OPTIONS = [ALL_CATEGORIES] + CATEGORY_NAMES

CategoryFilter = Union[Category, str]


class InvalidExpenseError(ValueError):
    """Raised when an :class:`Expense` is built with fields that break its invariants."""


@dataclass(frozen=True)
class Expense:
    id: str
    title: str
    amount: float
    occurred_on: datetime
    category: Category

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidExpenseError("Expense id must not be empty")
        if not self.title or not self.title.strip():
            raise InvalidExpenseError("Expense title must not be empty")
        if len(self.title) > TITLE_MAX_LENGTH:
            raise InvalidExpenseError(
                f"Expense title must be at most {TITLE_MAX_LENGTH} characters"
            )
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise InvalidExpenseError(f"Expense amount must be a number, got {self.amount!r}")
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise InvalidExpenseError(f"Expense amount must be positive, got {self.amount!r}")
        category = Category.parse(self.category)
        if category is None:
            raise InvalidExpenseError(f"Unknown category {self.category!r}")
        # Normalise "Food" -> Category.FOOD on a frozen instance
        object.__setattr__(self, "category", category)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "amount": float(self.amount),
            "occurred_on": self.occurred_on.isoformat(),
            "category": self.category.value,
        }

    @staticmethod
    def from_dict(d: dict) -> "Expense":
        occurred_on = d["occurred_on"]
        if not isinstance(occurred_on, datetime):
            occurred_on = datetime.fromisoformat(str(occurred_on))
        if occurred_on.tzinfo is not None:
            # Records are kept in naive local time, like datetime.now()
            occurred_on = occurred_on.astimezone().replace(tzinfo=None)
        return Expense(
            id=str(d["id"]),
            title=d["title"],
            amount=float(d["amount"]),
            occurred_on=occurred_on,
            category=d["category"],
        )


@dataclass(frozen=True)
class ExpenseDraft:
    """Unvalidated input for a new expense, as typed into the add form.

    ``amount`` may be a number or the raw text of the amount field and
    ``category`` may be a :class:`Category`, its name, or empty.
    """

    title: str = ""
    amount: Union[float, int, str, None] = None
    category: Union[Category, str, None] = None
