"""Budget service: budget CRUD and the pacing/summary reads.

Data is fetched here; every number is computed by ``pennypace.pacing``.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.config import settings
from pennypace.models.budget import Budget
from pennypace.pacing import (
    BudgetLine,
    BudgetSummary,
    PacingResult,
    Period,
    PeriodKind,
    aggregate,
    calculate_pacing,
    normalized_budget_total,
    resolve_period,
    summarize_budgets,
)
from pennypace.pacing.money import ZERO, to_money
from pennypace.services import expense_service
from pennypace.services.clock import resolve_now

logger = logging.getLogger("pennypace.budgets")

_SPLIT_FIELDS = ("weekday_amount", "weekend_amount")


async def list_budgets(db: AsyncSession, user_id: str) -> list[Budget]:
    result = await db.execute(
        select(Budget).where(Budget.user_id == user_id).order_by(Budget.category)
    )
    return list(result.scalars().all())


async def get_budget(db: AsyncSession, user_id: str, budget_id: uuid.UUID) -> Budget | None:
    result = await db.execute(
        select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_budget_for_category(
    db: AsyncSession, user_id: str, category: str
) -> Budget | None:
    result = await db.execute(
        select(Budget).where(Budget.user_id == user_id, Budget.category == category)
    )
    return result.scalar_one_or_none()


def _apply(budget: Budget, line: BudgetLine, amount: Decimal) -> None:
    budget.amount = amount
    budget.period = line.period_kind
    if line.is_split:
        budget.weekday_amount = line.limit.weekday_amount
        budget.weekend_amount = line.limit.weekend_amount
    else:
        budget.weekday_amount = None
        budget.weekend_amount = None


async def upsert_budget(
    db: AsyncSession,
    *,
    user_id: str,
    category: str,
    amount: Decimal,
    period: PeriodKind = PeriodKind.monthly,
    weekday_amount: Decimal | None = None,
    weekend_amount: Decimal | None = None,
) -> Budget:
    """Create the category's budget, or replace the existing one.

    Raises InvalidInputError for negative amounts or a half-set split.
    """
    line = BudgetLine.from_fields(
        category=category,
        amount=amount,
        period=period,
        weekday_amount=weekday_amount,
        weekend_amount=weekend_amount,
    )

    budget = await get_budget_for_category(db, user_id, category)
    created = budget is None
    if created:
        budget = Budget(user_id=user_id, category=category)
        db.add(budget)
    _apply(budget, line, to_money(amount))
    await db.flush()

    logger.info(
        "budget.%s id=%s category=%s period=%s split=%s",
        "created" if created else "replaced",
        budget.id,
        category,
        line.period_kind.value,
        line.is_split,
    )
    return budget


async def update_budget(db: AsyncSession, budget: Budget, changes: dict) -> Budget:
    """Apply a partial update.

    Split amounts present in ``changes`` (including explicit nulls) replace the
    stored ones; the merged result must still be both-or-neither.
    """
    amount = changes.get("amount")
    if amount is None:
        amount = budget.amount
    period = changes.get("period") or budget.period
    split = {field: changes.get(field, getattr(budget, field)) for field in _SPLIT_FIELDS}

    line = BudgetLine.from_fields(
        category=budget.category, amount=amount, period=period, **split
    )
    _apply(budget, line, to_money(amount))
    await db.flush()

    logger.info("budget.updated id=%s fields=%s", budget.id, sorted(changes))
    return budget


async def delete_budget(db: AsyncSession, budget: Budget) -> None:
    await db.delete(budget)
    await db.flush()
    logger.info("budget.deleted id=%s", budget.id)


# --- Pacing reads ---

async def _period_totals(
    db: AsyncSession,
    user_id: str,
    period: Period,
    *,
    category: str | None = None,
):
    expenses = await expense_service.expenses_between(
        db, user_id, period.start, period.end, category=category
    )
    return aggregate(expense_service.to_records(expenses), period)


def period_budget_total(budgets: list[Budget], period: Period) -> Decimal:
    """All budgets expressed in ``period``'s terms (see normalized_budget_total)."""
    return sum(
        (normalized_budget_total(b, period, settings.weeks_per_month) for b in budgets),
        ZERO,
    )


async def budget_pacing(
    db: AsyncSession,
    user_id: str,
    budget: Budget,
    *,
    now: datetime | None = None,
) -> PacingResult:
    """Pace one budget over its own period against its category's spending."""
    period = resolve_period(resolve_now(now), budget.period)
    totals = await _period_totals(db, user_id, period, category=budget.category)
    budget_total = normalized_budget_total(budget, period, settings.weeks_per_month)
    return calculate_pacing(budget_total, totals.spent(budget.category), period)


async def overall_summary(
    db: AsyncSession, user_id: str, *, now: datetime | None = None
) -> PacingResult:
    """Weekly pacing of every budget against every expense of the week."""
    period = resolve_period(resolve_now(now), PeriodKind.weekly)
    budgets = await list_budgets(db, user_id)
    totals = await _period_totals(db, user_id, period)
    return calculate_pacing(period_budget_total(budgets, period), totals.total_spent, period)


async def monthly_summary(
    db: AsyncSession, user_id: str, *, now: datetime | None = None
) -> BudgetSummary:
    """Per-category pacing for the current month plus all-category totals."""
    period = resolve_period(resolve_now(now), PeriodKind.monthly)
    budgets = await list_budgets(db, user_id)
    totals = await _period_totals(db, user_id, period)
    return summarize_budgets(budgets, totals, period, settings.weeks_per_month)
