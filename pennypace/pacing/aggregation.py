"""Spending aggregation: totals per category, split by weekday/weekend."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from pennypace.pacing.errors import InvalidInputError
from pennypace.pacing.money import ZERO, to_money
from pennypace.pacing.periods import Period


@dataclass(frozen=True)
class ExpenseRecord:
    amount: Decimal
    category: str
    date: datetime

    def __post_init__(self):
        object.__setattr__(self, "amount", to_money(self.amount))
        if not isinstance(self.date, datetime):
            raise InvalidInputError(f"Expense date must be a datetime, got {self.date!r}")
        if not isinstance(self.category, str):
            raise InvalidInputError(f"Expense category must be a string, got {self.category!r}")

    @classmethod
    def from_obj(cls, obj) -> "ExpenseRecord":
        """Build from anything with ``amount``, ``category`` and ``date``."""
        if isinstance(obj, cls):
            return obj
        try:
            return cls(amount=obj.amount, category=obj.category, date=obj.date)
        except AttributeError as exc:
            raise InvalidInputError(f"Not an expense: {obj!r}") from exc


@dataclass
class SpendingTotals:
    total_spent: Decimal = ZERO
    by_category: dict[str, Decimal] = field(default_factory=dict)
    by_category_weekday: dict[str, Decimal] = field(default_factory=dict)
    by_category_weekend: dict[str, Decimal] = field(default_factory=dict)

    def spent(self, category: str) -> Decimal:
        return self.by_category.get(category, ZERO)

    def weekday_spent(self, category: str) -> Decimal:
        return self.by_category_weekday.get(category, ZERO)

    def weekend_spent(self, category: str) -> Decimal:
        return self.by_category_weekend.get(category, ZERO)


def _sort_key(record: ExpenseRecord):
    moment = record.date
    if moment.tzinfo is not None:
        moment = moment.replace(tzinfo=None) - moment.utcoffset()
    return (moment, record.category, record.amount)


def aggregate(expenses: Iterable, period: Period) -> SpendingTotals:
    """Sum expense amounts into total, per-category and weekday/weekend buckets.

    The caller is responsible for filtering expenses to the period and user.
    Each expense is classified by its own date, not by ``period.as_of``.
    """
    records = sorted((ExpenseRecord.from_obj(e) for e in expenses), key=_sort_key)

    total = ZERO
    by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)
    weekday: dict[str, Decimal] = defaultdict(lambda: ZERO)
    weekend: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for record in records:
        total += record.amount
        by_category[record.category] += record.amount
        if period.is_weekend(record.date):
            weekend[record.category] += record.amount
        else:
            weekday[record.category] += record.amount

    return SpendingTotals(
        total_spent=total,
        by_category=dict(by_category),
        by_category_weekday=dict(weekday),
        by_category_weekend=dict(weekend),
    )
