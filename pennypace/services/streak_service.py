"""Streak service: consecutive weeks spent within the weekly budget."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.core.middleware import hash_user_id
from pennypace.models.streak import Streak
from pennypace.pacing import PeriodKind, resolve_period
from pennypace.pacing.periods import DAYS_PER_WEEK
from pennypace.services import budget_service, expense_service
from pennypace.services.clock import ensure_tz, resolve_now, to_utc

logger = logging.getLogger("pennypace.streaks")


async def get_streak(db: AsyncSession, user_id: str) -> Streak | None:
    result = await db.execute(select(Streak).where(Streak.user_id == user_id))
    return result.scalar_one_or_none()


async def get_or_create_streak(db: AsyncSession, user_id: str) -> Streak:
    streak = await get_streak(db, user_id)
    if streak is None:
        streak = Streak(
            user_id=user_id,
            current_streak=0,
            longest_streak=0,
            weekly_under_budget=False,
        )
        db.add(streak)
        await db.flush()
    return streak


def record_week(streak: Streak, *, under_budget: bool, now: datetime) -> Streak:
    """Fold this week's budget outcome into the streak.

    A week counts once: the streak only grows when at least seven days have
    passed since the last counted week. Going over budget after an
    under-budget check resets the current streak.
    """
    if under_budget:
        last = streak.last_under_budget_date
        days_since = (now - ensure_tz(last)).days if last is not None else DAYS_PER_WEEK
        if days_since >= DAYS_PER_WEEK:
            streak.current_streak += 1
            streak.longest_streak = max(streak.longest_streak, streak.current_streak)
            streak.last_under_budget_date = to_utc(now)
        streak.weekly_under_budget = True
    else:
        if streak.weekly_under_budget:
            streak.current_streak = 0
        streak.weekly_under_budget = False
    return streak


async def refresh_streak(
    db: AsyncSession, user_id: str, *, now: datetime | None = None
) -> Streak:
    """Check this week's spending against the weekly budget and update the streak."""
    now = resolve_now(now)
    period = resolve_period(now, PeriodKind.weekly)

    streak = await get_or_create_streak(db, user_id)
    budgets = await budget_service.list_budgets(db, user_id)
    expenses = await expense_service.expenses_between(db, user_id, period.start, period.end)

    total_budget = budget_service.period_budget_total(budgets, period)
    total_spent = sum((e.amount for e in expenses), 0)
    under_budget = total_spent <= total_budget

    before = streak.current_streak
    record_week(streak, under_budget=under_budget, now=now)
    await db.flush()

    if streak.current_streak != before:
        logger.info(
            "streak.changed user_hash=%s from=%d to=%d",
            hash_user_id(user_id), before, streak.current_streak,
        )
    return streak
