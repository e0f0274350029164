"""Spending aggregation: totals, per-category buckets, weekday/weekend split."""

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from pennypace.pacing import ExpenseRecord, InvalidInputError, PeriodKind, aggregate, resolve_period

UTC = timezone.utc

# Monday 19 October 2026
NOW = datetime(2026, 10, 19, 12, tzinfo=UTC)


@pytest.fixture
def period():
    return resolve_period(NOW, PeriodKind.monthly)


def _expense(amount, category, day, hour=12):
    return ExpenseRecord(
        amount=Decimal(amount), category=category, date=datetime(2026, 10, day, hour, tzinfo=UTC)
    )


def test_empty_input(period):
    totals = aggregate([], period)

    assert totals.total_spent == Decimal("0")
    assert totals.by_category == {}
    assert totals.spent("Food") == Decimal("0")


def test_totals_by_category_and_day_kind(period):
    expenses = [
        _expense("12.50", "Food", 5),   # Monday
        _expense("30.00", "Food", 10),  # Saturday
        _expense("7.25", "Transport", 11),  # Sunday
        _expense("20.00", "Food", 14),  # Wednesday
    ]

    totals = aggregate(expenses, period)

    assert totals.total_spent == Decimal("69.75")
    assert totals.by_category == {"Food": Decimal("62.50"), "Transport": Decimal("7.25")}
    assert totals.weekday_spent("Food") == Decimal("32.50")
    assert totals.weekend_spent("Food") == Decimal("30.00")
    assert totals.weekday_spent("Transport") == Decimal("0")
    assert totals.weekend_spent("Transport") == Decimal("7.25")


def test_classification_uses_expense_date_not_now(period):
    # NOW is a Monday; the expense is on a Sunday
    totals = aggregate([_expense("10", "Food", 18)], period)

    assert totals.weekend_spent("Food") == Decimal("10")
    assert totals.weekday_spent("Food") == Decimal("0")


def test_order_of_input_does_not_change_totals(period):
    expenses = [
        _expense("0.10", "Food", 3),
        _expense("0.20", "Food", 1),
        _expense("0.30", "Other", 2),
    ]

    forward = aggregate(expenses, period)
    backward = aggregate(list(reversed(expenses)), period)

    assert forward == backward
    assert forward.total_spent == Decimal("0.60")


def test_accepts_objects_with_expense_attributes(period):
    row = SimpleNamespace(amount=Decimal("4.99"), category="Food", date=NOW)

    totals = aggregate([row], period)

    assert totals.spent("Food") == Decimal("4.99")


def test_float_amounts_are_converted_exactly(period):
    rows = [SimpleNamespace(amount=0.1, category="Food", date=NOW) for _ in range(3)]

    totals = aggregate(rows, period)

    assert totals.total_spent == Decimal("0.3")


def test_negative_amount_rejected(period):
    row = SimpleNamespace(amount=Decimal("-1"), category="Food", date=NOW)
    with pytest.raises(InvalidInputError):
        aggregate([row], period)


def test_malformed_date_rejected(period):
    row = SimpleNamespace(amount=Decimal("1"), category="Food", date="2026-10-19")
    with pytest.raises(InvalidInputError):
        aggregate([row], period)


def test_non_expense_rejected(period):
    with pytest.raises(InvalidInputError):
        aggregate([object()], period)
