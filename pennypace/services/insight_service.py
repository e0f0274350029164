"""Insight service: plain-English weekly insights and the weekly review.

Weekly figures use the Sunday-based week containing "now". Budgets declared
monthly are converted to weekly terms (see normalized_budget_total).
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.config import settings
from pennypace.models.budget import Budget
from pennypace.pacing import (
    Period,
    PeriodKind,
    SpendingTotals,
    aggregate,
    normalized_budget_total,
    resolve_period,
)
from pennypace.pacing.money import HUNDRED, clamp_zero, percentage_of, round2
from pennypace.pacing.periods import DAYS_PER_WEEK
from pennypace.services import budget_service, expense_service, streak_service
from pennypace.services.clock import resolve_now

WARNING_THRESHOLD = Decimal("80")


def _dollars(amount: Decimal) -> str:
    return f"${round2(amount)}"


def _percent(value: Decimal) -> str:
    return f"{value.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}%"


def generate_weekly_insights(
    totals: SpendingTotals,
    budgets: list[Budget],
    period: Period,
    total_budget: Decimal,
) -> list[dict]:
    """Build the insight list shown on the weekly screens."""
    insights = []
    total_spent = totals.total_spent

    if totals.by_category:
        category, amount = max(totals.by_category.items(), key=lambda item: (item[1], item[0]))
        insights.append({
            "type": "top_category",
            "message": f"You spent the most on {category} this week - {_dollars(amount)}.",
        })

    if total_budget <= 0:
        insights.append({
            "type": "no_budget",
            "message": "You haven't set a budget yet. Add one to start tracking your pace.",
        })
    else:
        used = total_spent / total_budget * HUNDRED
        if used > HUNDRED:
            insights.append({
                "type": "over_budget",
                "message": (
                    f"You're {_percent(used - HUNDRED)} over budget this week. "
                    "Consider cutting back on non-essentials."
                ),
            })
        elif used > WARNING_THRESHOLD:
            insights.append({
                "type": "warning",
                "message": (
                    f"You've used {_percent(used)} of your budget. "
                    "Watch your spending for the rest of the week."
                ),
            })
        else:
            left = clamp_zero(total_budget - total_spent)
            insights.append({
                "type": "on_track",
                "message": (
                    f"You're doing great! You've used {_percent(used)} of your budget "
                    f"and still have {_dollars(left)} left."
                ),
            })

    insights.append({
        "type": "pattern",
        "message": (
            f"You're averaging {_dollars(total_spent / DAYS_PER_WEEK)} per day this week."
        ),
    })

    for budget in budgets:
        limit = normalized_budget_total(budget, period, settings.weeks_per_month)
        spent = totals.spent(budget.category)
        if limit > 0 and spent > limit:
            over = spent / limit * HUNDRED - HUNDRED
            insights.append({
                "type": "category_over",
                "message": f"Your {budget.category} spending is {_percent(over)} over budget.",
            })

    return insights


async def _weekly_inputs(db: AsyncSession, user_id: str, now: datetime | None):
    period = resolve_period(resolve_now(now), PeriodKind.weekly)
    budgets = await budget_service.list_budgets(db, user_id)
    expenses = await expense_service.expenses_between(db, user_id, period.start, period.end)
    totals = aggregate(expense_service.to_records(expenses), period)
    total_budget = budget_service.period_budget_total(budgets, period)
    return period, budgets, expenses, totals, total_budget


async def weekly_insights(
    db: AsyncSession, user_id: str, *, now: datetime | None = None
) -> dict:
    period, budgets, _, totals, total_budget = await _weekly_inputs(db, user_id, now)
    return {
        "period": {"start": period.start, "end": period.end},
        "total_spent": totals.total_spent,
        "total_budget": total_budget,
        "insights": generate_weekly_insights(totals, budgets, period, total_budget),
    }


async def weekly_review(
    db: AsyncSession, user_id: str, *, now: datetime | None = None
) -> dict:
    """Week summary, category breakdown, latest expenses, streak and insights.

    Reads the streak without updating it.
    """
    period, budgets, expenses, totals, total_budget = await _weekly_inputs(db, user_id, now)
    streak = await streak_service.get_streak(db, user_id)
    latest = sorted(expenses, key=lambda e: e.date, reverse=True)
    total_spent = totals.total_spent

    return {
        "period": {"start": period.start, "end": period.end},
        "summary": {
            "total_budget": total_budget,
            "total_spent": total_spent,
            "remaining": clamp_zero(total_budget - total_spent),
            "percentage_used": percentage_of(total_spent, total_budget),
        },
        "category_spending": totals.by_category,
        "expenses": latest[: settings.recent_expenses_limit],
        "streak": {
            "current_streak": streak.current_streak if streak else 0,
            "longest_streak": streak.longest_streak if streak else 0,
            "weekly_under_budget": streak.weekly_under_budget if streak else False,
            "last_under_budget_date": streak.last_under_budget_date if streak else None,
        },
        "insights": generate_weekly_insights(totals, budgets, period, total_budget),
    }
