"""Pacing: actual spending against the even-spread expectation for "now"."""

from dataclasses import dataclass
from decimal import Decimal

from pennypace.pacing.money import HUNDRED, ZERO, clamp_zero, round1, to_money
from pennypace.pacing.periods import Period


@dataclass(frozen=True)
class PacingResult:
    """Pacing of one budget total against one spent figure.

    ``is_pacing_on_track`` checks the unrounded spent-to-expected ratio
    against 100, unlike ``CategoryPacing.is_budget_on_track``.
    """

    budget_total: Decimal
    spent: Decimal
    safe_to_spend: Decimal
    expected_spent: Decimal
    pacing: Decimal
    daily_allowance: Decimal
    is_pacing_on_track: bool
    days_elapsed: int
    days_total: int
    days_remaining: int


def calculate_pacing(budget_total, spent, period: Period) -> PacingResult:
    budget_total = to_money(budget_total, "budget_total")
    spent = to_money(spent, "spent")

    expected_spent = budget_total / period.days_total * period.days_elapsed
    safe_to_spend = clamp_zero(budget_total - spent)

    if expected_spent > 0:
        raw_pacing = spent / expected_spent * HUNDRED
    else:
        raw_pacing = ZERO
    pacing = round1(raw_pacing)

    if period.days_remaining > 0:
        daily_allowance = clamp_zero(safe_to_spend / period.days_remaining)
    else:
        daily_allowance = ZERO

    return PacingResult(
        budget_total=budget_total,
        spent=spent,
        safe_to_spend=safe_to_spend,
        expected_spent=expected_spent,
        pacing=pacing,
        daily_allowance=daily_allowance,
        is_pacing_on_track=raw_pacing <= HUNDRED,
        days_elapsed=period.days_elapsed,
        days_total=period.days_total,
        days_remaining=period.days_remaining,
    )
