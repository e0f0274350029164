"""Expense service: one-tap entry, edits, period queries and daily totals.

Every query is scoped to the user id passed in by the caller.
"""

import logging
import uuid
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.models.expense import Expense
from pennypace.pacing import ExpenseRecord, to_money
from pennypace.pacing.money import ZERO
from pennypace.services import category_service
from pennypace.services.clock import ensure_tz, resolve_now, to_utc

logger = logging.getLogger("pennypace.expenses")

_UPDATABLE_FIELDS = ("amount", "description", "category", "date")


async def create_expense(
    db: AsyncSession,
    *,
    user_id: str,
    amount: Decimal,
    description: str,
    category: str | None = None,
    date: datetime | None = None,
) -> Expense:
    """Store an expense. Category is auto-assigned from the description if missing."""
    amount = to_money(amount)
    description = description.strip()
    if not category:
        category = await category_service.categorize_description(db, user_id, description)

    expense = Expense(
        user_id=user_id,
        amount=amount,
        description=description,
        category=category,
        date=to_utc(date) if date is not None else to_utc(resolve_now(None)),
    )
    db.add(expense)
    await db.flush()

    logger.info("expense.created id=%s category=%s amount=%s", expense.id, category, amount)
    return expense


async def get_expense(
    db: AsyncSession, user_id: str, expense_id: uuid.UUID
) -> Expense | None:
    result = await db.execute(
        select(Expense).where(Expense.id == expense_id, Expense.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def list_expenses(
    db: AsyncSession,
    user_id: str,
    *,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    category: str | None = None,
    limit: int = 50,
) -> list[Expense]:
    """Newest first. Both date bounds are inclusive."""
    stmt = (
        select(Expense)
        .where(Expense.user_id == user_id)
        .order_by(Expense.date.desc())
    )
    if start_date is not None:
        stmt = stmt.where(Expense.date >= to_utc(start_date))
    if end_date is not None:
        stmt = stmt.where(Expense.date <= to_utc(end_date))
    if category is not None:
        stmt = stmt.where(Expense.category == category)
    stmt = stmt.limit(limit)

    result = await db.execute(stmt)
    return list(result.scalars().all())


async def expenses_between(
    db: AsyncSession,
    user_id: str,
    start: datetime,
    end: datetime,
    *,
    category: str | None = None,
) -> list[Expense]:
    """Expenses in ``[start, end)``, oldest first."""
    stmt = (
        select(Expense)
        .where(
            Expense.user_id == user_id,
            Expense.date >= to_utc(start),
            Expense.date < to_utc(end),
        )
        .order_by(Expense.date.asc())
    )
    if category is not None:
        stmt = stmt.where(Expense.category == category)
    result = await db.execute(stmt)
    return list(result.scalars().all())


def to_records(expenses: list[Expense]) -> list[ExpenseRecord]:
    """Engine input records with timezone-aware dates."""
    return [
        ExpenseRecord(amount=e.amount, category=e.category, date=ensure_tz(e.date))
        for e in expenses
    ]


async def update_expense(db: AsyncSession, expense: Expense, changes: dict) -> Expense:
    for field in _UPDATABLE_FIELDS:
        if field not in changes or changes[field] is None:
            continue
        value = changes[field]
        if field == "amount":
            value = to_money(value)
        elif field == "description":
            value = value.strip()
        elif field == "date":
            value = to_utc(value)
        setattr(expense, field, value)
    await db.flush()

    logger.info("expense.updated id=%s fields=%s", expense.id, sorted(changes))
    return expense


async def delete_expense(db: AsyncSession, expense: Expense) -> None:
    await db.delete(expense)
    await db.flush()
    logger.info("expense.deleted id=%s", expense.id)


async def total_spent(
    db: AsyncSession,
    user_id: str,
    *,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> Decimal:
    """Sum of amounts between two inclusive bounds."""
    stmt = select(func.coalesce(func.sum(Expense.amount), 0)).where(
        Expense.user_id == user_id
    )
    if start_date is not None:
        stmt = stmt.where(Expense.date >= to_utc(start_date))
    if end_date is not None:
        stmt = stmt.where(Expense.date <= to_utc(end_date))
    result = await db.execute(stmt)
    return Decimal(str(result.scalar_one()))


async def today_by_category(
    db: AsyncSession, user_id: str, *, now: datetime | None = None
) -> tuple[Decimal, list[tuple[str, Decimal]]]:
    """Today's total and per-category amounts, largest first."""
    now = resolve_now(now)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    expenses = await expenses_between(
        db, user_id, start_of_day, start_of_day + timedelta(days=1)
    )

    by_category: dict[str, Decimal] = {}
    total = ZERO
    for expense in expenses:
        by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount
        total += expense.amount

    ranked = sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
    return total, ranked
