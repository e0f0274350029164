from datetime import datetime

from pydantic import BaseModel

from pennypace.schemas.common import Money, Percent
from pennypace.schemas.expense import ExpenseRead


class PeriodBounds(BaseModel):
    start: datetime
    end: datetime

    model_config = {"from_attributes": True}


class InsightRead(BaseModel):
    type: str
    message: str


class WeeklyInsightsRead(BaseModel):
    period: PeriodBounds
    total_spent: Money
    total_budget: Money
    insights: list[InsightRead]


class StreakRead(BaseModel):
    current_streak: int
    longest_streak: int
    weekly_under_budget: bool = False
    last_under_budget_date: datetime | None = None

    model_config = {"from_attributes": True}


class ReviewSummary(BaseModel):
    total_budget: Money
    total_spent: Money
    remaining: Money
    percentage_used: Percent


class ReviewRead(BaseModel):
    period: PeriodBounds
    summary: ReviewSummary
    category_spending: dict[str, Money]
    expenses: list[ExpenseRead]
    streak: StreakRead
    insights: list[InsightRead]
