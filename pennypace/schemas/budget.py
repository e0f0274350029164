import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from pennypace.pacing.periods import PeriodKind
from pennypace.schemas.common import Money, Percent


class BudgetCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., ge=0, allow_inf_nan=False)
    period: PeriodKind = PeriodKind.monthly
    weekday_amount: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)
    weekend_amount: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def _split_both_or_neither(self):
        if (self.weekday_amount is None) != (self.weekend_amount is None):
            raise ValueError("weekday_amount and weekend_amount must be set together")
        return self


class BudgetUpdate(BaseModel):
    """Partial update. Send both split amounts as null to go back to a flat budget."""

    amount: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)
    period: PeriodKind | None = None
    weekday_amount: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)
    weekend_amount: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)


class BudgetRead(BaseModel):
    id: uuid.UUID
    category: str
    amount: Money
    period: PeriodKind
    weekday_amount: Money | None = None
    weekend_amount: Money | None = None
    has_separate_budgets: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PeriodRead(BaseModel):
    kind: PeriodKind
    start: datetime
    end: datetime
    days_elapsed: int
    days_total: int
    days_remaining: int
    weekday_days_total: int
    weekend_days_total: int
    weekday_days_remaining: int
    weekend_days_remaining: int

    model_config = {"from_attributes": True}


class PacingRead(BaseModel):
    budget_total: Money
    spent: Money
    safe_to_spend: Money
    expected_spent: Money
    pacing: Percent
    daily_allowance: Money
    is_pacing_on_track: bool
    days_elapsed: int
    days_total: int
    days_remaining: int

    model_config = {"from_attributes": True}


class CategoryPacingRead(BaseModel):
    category: str
    budget_total: Money
    spent: Money
    remaining: Money
    percentage_used: Percent
    safe_to_spend_today: Money
    is_budget_on_track: bool
    weekday_spent: Money
    weekend_spent: Money
    has_separate_budgets: bool
    is_today_weekend: bool

    model_config = {"from_attributes": True}


class BudgetSummaryRead(BaseModel):
    period: PeriodRead
    total_budget: Money
    total_spent: Money
    remaining: Money
    percentage_used: Percent
    safe_to_spend_today: Money
    days_elapsed: int
    days_total: int
    days_remaining: int
    categories: list[CategoryPacingRead]

    model_config = {"from_attributes": True}
