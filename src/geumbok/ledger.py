"""In-memory household ledger for one assistant session.

Expenses live only as long as the Ledger object; storing them is the
backend's job (see geumbok.client).
"""

from __future__ import annotations

import calendar
import itertools
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Iterable, Literal

from geumbok.core.constants import DEFAULT_RECENT_LIMIT
from geumbok.core.types import CATEGORIES, DEFAULT_CATEGORY, CategoryLabel, VoiceCommand

Period = Literal["week", "month", "year"]

_EDITABLE_FIELDS = frozenset({"amount", "description", "category", "date"})


@dataclass(frozen=True, slots=True)
class Expense:
    """A single recorded expense."""

    id: int
    amount: int
    description: str
    category: CategoryLabel
    date: date

    def to_payload(self) -> dict[str, object]:
        """Request body for the backend's expense endpoints."""
        return {
            "amount": self.amount,
            "description": self.description,
            "category": self.category,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class SpendingSummary:
    """Total and per-category spending over a set of expenses.

    ``by_category`` follows the category table order and only lists
    categories with spending.
    """

    total: int = 0
    by_category: dict[CategoryLabel, int] = field(default_factory=dict)


def _validate(amount: int, description: str, category: str) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise ValueError(f"amount must be a non-negative integer, got {amount!r}")
    if not isinstance(description, str) or not description.strip():
        raise ValueError("description must not be empty")
    if category not in CATEGORIES:
        raise ValueError(f"unknown category {category!r}")


def summarize(expenses: Iterable[Expense]) -> SpendingSummary:
    """Sum *expenses* overall and by category."""
    totals: dict[CategoryLabel, int] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, 0) + e.amount
    by_category = {c: totals[c] for c in CATEGORIES if c in totals}
    return SpendingSummary(total=sum(by_category.values()), by_category=by_category)


def category_percentages(summary: SpendingSummary) -> dict[CategoryLabel, int]:
    """Each category's rounded share of the total, in percent."""
    if summary.total <= 0:
        return {}
    return {
        c: round(amount * 100 / summary.total)
        for c, amount in summary.by_category.items()
    }


def _months_back(day: date, months: int) -> date:
    """Same day *months* earlier, clamped to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def period_start(period: Period, today: date) -> date:
    """First day included in *period* ending at *today*."""
    if period == "week":
        return today - timedelta(days=7)
    if period == "month":
        return _months_back(today, 1)
    if period == "year":
        return _months_back(today, 12)
    raise ValueError(f"unknown period {period!r}")


class Ledger:
    """Session-scoped list of expenses with simple aggregation."""

    def __init__(self, expenses: Iterable[Expense] = ()) -> None:
        self._expenses: list[Expense] = list(expenses)
        start = max((e.id for e in self._expenses), default=0) + 1
        self._ids = itertools.count(start)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self):
        return iter(self._expenses)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    def add(
        self,
        amount: int,
        description: str,
        category: CategoryLabel = DEFAULT_CATEGORY,
        on: date | None = None,
    ) -> Expense:
        """Record a new expense. Raises ValueError on invalid input."""
        _validate(amount, description, category)
        expense = Expense(
            id=next(self._ids),
            amount=amount,
            description=description.strip(),
            category=category,
            date=on or date.today(),
        )
        self._expenses.append(expense)
        return expense

    def record(self, command: VoiceCommand, on: date | None = None) -> Expense:
        """Record the expense carried by a classified command."""
        if command.intent != "expense" or command.data is None:
            raise ValueError(f"not an expense command: {command.intent}")
        d = command.data
        return self.add(d.amount, d.description, d.category, on=on)

    def get(self, expense_id: int) -> Expense:
        for e in self._expenses:
            if e.id == expense_id:
                return e
        raise KeyError(expense_id)

    def update(self, expense_id: int, **changes: object) -> Expense:
        """Replace fields of an existing expense.

        Raises KeyError for an unknown id and ValueError for fields that
        cannot be edited or values that fail validation.
        """
        current = self.get(expense_id)
        if "id" in changes:
            raise ValueError("expense id cannot be changed")
        unknown = sorted(set(changes) - _EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"unknown expense fields: {', '.join(unknown)}")
        if "date" in changes and not isinstance(changes["date"], date):
            raise ValueError(f"date must be a date, got {changes['date']!r}")
        if isinstance(changes.get("description"), str):
            changes["description"] = changes["description"].strip()
        updated = replace(current, **changes)
        _validate(updated.amount, updated.description, updated.category)
        idx = self._expenses.index(current)
        self._expenses[idx] = updated
        return updated

    def remove(self, expense_id: int) -> bool:
        for idx, e in enumerate(self._expenses):
            if e.id == expense_id:
                del self._expenses[idx]
                return True
        return False

    def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[Expense]:
        """Newest expenses first (by date, then insertion)."""
        ordered = sorted(self._expenses, key=lambda e: (e.date, e.id), reverse=True)
        return ordered[:limit]

    def for_month(self, year: int, month: int) -> list[Expense]:
        return [
            e for e in self._expenses if e.date.year == year and e.date.month == month
        ]

    def in_period(self, period: Period, today: date | None = None) -> list[Expense]:
        """Expenses dated within *period* up to and including *today*."""
        end = today or date.today()
        start = period_start(period, end)
        return [e for e in self._expenses if start <= e.date <= end]

    def monthly_stats(self, year: int, month: int) -> SpendingSummary:
        return summarize(self.for_month(year, month))
