"""Budget pacing engine: pure functions over in-memory budgets and expenses.

Nothing in this package touches the database or the clock. Callers resolve
"now", fetch rows, and pass them in.
"""

from pennypace.pacing.aggregation import ExpenseRecord, SpendingTotals, aggregate
from pennypace.pacing.calculator import PacingResult, calculate_pacing
from pennypace.pacing.categories import (
    WEEKS_PER_MONTH,
    BudgetLine,
    BudgetSummary,
    CategoryPacing,
    FlatLimit,
    SplitLimit,
    normalized_budget_total,
    resolve_category,
    summarize_budgets,
)
from pennypace.pacing.errors import InvalidInputError
from pennypace.pacing.money import round1, to_money
from pennypace.pacing.periods import DaySplit, Period, PeriodKind, resolve_period

__all__ = [
    "WEEKS_PER_MONTH",
    "BudgetLine",
    "BudgetSummary",
    "CategoryPacing",
    "DaySplit",
    "ExpenseRecord",
    "FlatLimit",
    "InvalidInputError",
    "PacingResult",
    "Period",
    "PeriodKind",
    "SpendingTotals",
    "SplitLimit",
    "aggregate",
    "calculate_pacing",
    "normalized_budget_total",
    "resolve_category",
    "resolve_period",
    "round1",
    "summarize_budgets",
    "to_money",
]
