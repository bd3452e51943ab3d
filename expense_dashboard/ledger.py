"""Add and remove operations on the expense list.

The list is never modified in place: both operations return a new list,
leaving the caller's copy untouched.  Invalid drafts are reported as
per-field :class:`ValidationError` values rather than raised, so the
presentation layer can show every problem next to its field at once.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from .config import TITLE_MAX_LENGTH
from .models import Category, Expense, ExpenseDraft

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]

MAX_ID_ATTEMPTS = 5


class ValidationError(Enum):
    MISSING_TITLE = "Title is required"
    TITLE_TOO_LONG = f"Title must be {TITLE_MAX_LENGTH} characters or fewer"
    INVALID_AMOUNT = "Please enter a valid positive amount"
    MISSING_CATEGORY = "Please select a category"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class AddResult:
    expenses: List[Expense]
    record: Optional[Expense] = None
    errors: Dict[str, ValidationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.record is not None


def new_expense_id() -> str:
    return str(uuid.uuid4())


def parse_amount(value) -> Optional[float]:
    """Best-effort conversion of a typed amount to a float; ``None`` if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def validate_draft(draft: ExpenseDraft) -> Dict[str, ValidationError]:
    """Check every field of ``draft`` and return ``{field: error}`` for the ones that fail."""
    errors: Dict[str, ValidationError] = {}

    title = draft.title or ""
    if not title.strip():
        errors["title"] = ValidationError.MISSING_TITLE
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = ValidationError.TITLE_TOO_LONG

    amount = parse_amount(draft.amount)
    if amount is None or not math.isfinite(amount) or amount <= 0:
        errors["amount"] = ValidationError.INVALID_AMOUNT

    if Category.parse(draft.category) is None:
        errors["category"] = ValidationError.MISSING_CATEGORY

    return errors


def add_expense(
    expenses: Sequence[Expense],
    draft: ExpenseDraft,
    now: datetime,
    id_factory: IdFactory = new_expense_id,
) -> AddResult:
    """Validate ``draft`` and append it to a copy of ``expenses``.

    The new record is stamped with ``now`` and a fresh identifier from
    ``id_factory``.  On validation failure the original list is returned
    unchanged together with all field errors.

    Raises ``RuntimeError`` only when ``id_factory`` keeps returning ids
    already in ``expenses`` (``MAX_ID_ATTEMPTS`` times in a row).  That is
    a broken factory, not bad user input; the default UUID factory never
    hits it.
    """
    errors = validate_draft(draft)
    if errors:
        logger.info(
            "Rejected expense draft: %s",
            ", ".join(f"{name}={error.name}" for name, error in errors.items()),
        )
        return AddResult(expenses=list(expenses), errors=errors)

    existing_ids = {expense.id for expense in expenses}
    for _ in range(MAX_ID_ATTEMPTS):
        expense_id = id_factory()
        if expense_id not in existing_ids:
            break
    else:
        raise RuntimeError(f"Could not generate a unique expense id after {MAX_ID_ATTEMPTS} attempts")

    record = Expense(
        id=expense_id,
        title=draft.title,
        amount=parse_amount(draft.amount),
        occurred_on=now,
        category=Category.parse(draft.category),
    )
    logger.info("Added expense %s (%s, %.2f)", record.id, record.category.value, record.amount)
    return AddResult(expenses=[*expenses, record], record=record)


def remove_expense(expenses: Sequence[Expense], expense_id: str) -> List[Expense]:
    """Copy of ``expenses`` without the record ``expense_id``; unknown ids are ignored."""
    remaining = [expense for expense in expenses if expense.id != expense_id]
    if len(remaining) == len(expenses):
        logger.debug("Remove ignored, no expense with id %s", expense_id)
    else:
        logger.debug("Removed expense %s", expense_id)
    return remaining
