"""Per-category budget resolution and the all-category summary.

A budget is either flat (one ceiling for the whole period) or split
(separate per-day ceilings for weekdays and weekend days).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from pennypace.pacing.aggregation import SpendingTotals
from pennypace.pacing.errors import InvalidInputError
from pennypace.pacing.money import ZERO, clamp_zero, percentage_of, to_money
from pennypace.pacing.periods import Period, PeriodKind

# Average weeks per month. Monthly totals of weekly budgets carry a small
# bias from it.
WEEKS_PER_MONTH = Decimal("4.33")


@dataclass(frozen=True)
class FlatLimit:
    amount: Decimal


@dataclass(frozen=True)
class SplitLimit:
    weekday_amount: Decimal
    weekend_amount: Decimal


@dataclass(frozen=True)
class BudgetLine:
    category: str
    period_kind: PeriodKind
    limit: FlatLimit | SplitLimit

    @classmethod
    def from_fields(
        cls,
        category: str,
        amount,
        period: PeriodKind | str = PeriodKind.monthly,
        weekday_amount=None,
        weekend_amount=None,
    ) -> "BudgetLine":
        """Build from the stored shape: split only when both per-day amounts are set."""
        try:
            period_kind = PeriodKind(period)
        except ValueError:
            raise InvalidInputError(f"Unknown budget period: {period!r}")

        if weekday_amount is None and weekend_amount is None:
            limit = FlatLimit(to_money(amount, "amount"))
        elif weekday_amount is not None and weekend_amount is not None:
            to_money(amount, "amount")
            limit = SplitLimit(
                weekday_amount=to_money(weekday_amount, "weekday_amount"),
                weekend_amount=to_money(weekend_amount, "weekend_amount"),
            )
        else:
            raise InvalidInputError(
                f"Budget for {category!r} needs both weekday_amount and "
                "weekend_amount, or neither"
            )
        return cls(category=category, period_kind=period_kind, limit=limit)

    @classmethod
    def from_obj(cls, obj) -> "BudgetLine":
        if isinstance(obj, cls):
            return obj
        return cls.from_fields(
            category=obj.category,
            amount=obj.amount,
            period=obj.period,
            weekday_amount=getattr(obj, "weekday_amount", None),
            weekend_amount=getattr(obj, "weekend_amount", None),
        )

    @property
    def is_split(self) -> bool:
        return isinstance(self.limit, SplitLimit)


@dataclass(frozen=True)
class CategoryPacing:
    """Budget state of one category.

    ``is_budget_on_track`` is the strict ``spent <= budget_total`` check.
    """

    category: str
    budget_total: Decimal
    spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    safe_to_spend_today: Decimal
    is_budget_on_track: bool
    weekday_spent: Decimal
    weekend_spent: Decimal
    has_separate_budgets: bool
    is_today_weekend: bool


@dataclass(frozen=True)
class BudgetSummary:
    period: Period
    total_budget: Decimal
    total_spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    safe_to_spend_today: Decimal
    categories: list[CategoryPacing]

    @property
    def days_elapsed(self) -> int:
        return self.period.days_elapsed

    @property
    def days_total(self) -> int:
        return self.period.days_total

    @property
    def days_remaining(self) -> int:
        return self.period.days_remaining


def split_budget_total(limit: SplitLimit, period: Period) -> Decimal:
    return (
        limit.weekday_amount * period.weekday_days_total
        + limit.weekend_amount * period.weekend_days_total
    )


def _split_safe_to_spend_today(
    limit: SplitLimit, totals: SpendingTotals, category: str, period: Period
) -> Decimal:
    if period.is_today_weekend:
        allowance = limit.weekend_amount * period.weekend_days_total
        spent = totals.weekend_spent(category)
        days_left = period.weekend_days_remaining
    else:
        allowance = limit.weekday_amount * period.weekday_days_total
        spent = totals.weekday_spent(category)
        days_left = period.weekday_days_remaining
    return clamp_zero(allowance - spent) / max(1, days_left)


def resolve_category(budget, totals: SpendingTotals, period: Period) -> CategoryPacing:
    budget = BudgetLine.from_obj(budget)
    category = budget.category
    spent = totals.spent(category)

    if isinstance(budget.limit, SplitLimit):
        budget_total = split_budget_total(budget.limit, period)
        remaining = clamp_zero(budget_total - spent)
        safe_today = _split_safe_to_spend_today(budget.limit, totals, category, period)
    else:
        budget_total = budget.limit.amount
        remaining = clamp_zero(budget_total - spent)
        if period.days_remaining > 0:
            safe_today = remaining / period.days_remaining
        else:
            safe_today = ZERO

    return CategoryPacing(
        category=category,
        budget_total=budget_total,
        spent=spent,
        remaining=remaining,
        percentage_used=percentage_of(spent, budget_total),
        safe_to_spend_today=safe_today,
        is_budget_on_track=spent <= budget_total,
        weekday_spent=totals.weekday_spent(category),
        weekend_spent=totals.weekend_spent(category),
        has_separate_budgets=budget.is_split,
        is_today_weekend=period.is_today_weekend,
    )


def normalized_budget_total(
    budget, period: Period, weeks_per_month: Decimal = WEEKS_PER_MONTH
) -> Decimal:
    """A budget's contribution to an all-category total for ``period``.

    Split budgets are measured in the period's own day counts. Flat budgets
    declared for the other period kind are converted with ``weeks_per_month``.
    """
    budget = BudgetLine.from_obj(budget)
    if isinstance(budget.limit, SplitLimit):
        return split_budget_total(budget.limit, period)

    amount = budget.limit.amount
    if budget.period_kind is period.kind:
        return amount
    if period.kind is PeriodKind.monthly:
        return amount * weeks_per_month
    return amount / weeks_per_month


def summarize_budgets(
    budgets: Iterable,
    totals: SpendingTotals,
    period: Period,
    weeks_per_month: Decimal = WEEKS_PER_MONTH,
) -> BudgetSummary:
    """Resolve every budget and roll the results up into period totals.

    The summary's ``safe_to_spend_today`` is the sum of each category's own
    allowance for today's kind of day.
    """
    lines = [BudgetLine.from_obj(b) for b in budgets]
    categories = [resolve_category(line, totals, period) for line in lines]

    total_budget = sum(
        (normalized_budget_total(line, period, weeks_per_month) for line in lines), ZERO
    )
    total_spent = totals.total_spent

    return BudgetSummary(
        period=period,
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=clamp_zero(total_budget - total_spent),
        percentage_used=percentage_of(total_spent, total_budget),
        safe_to_spend_today=sum((c.safe_to_spend_today for c in categories), ZERO),
        categories=categories,
    )
