import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from pennypace.schemas.common import Money


class ExpenseCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    description: str = Field(..., min_length=1, max_length=500)
    category: str | None = Field(default=None, max_length=100)
    date: datetime | None = None

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if isinstance(value, str) else value


class ExpenseUpdate(BaseModel):
    amount: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    date: datetime | None = None

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if isinstance(value, str) else value


class ExpenseRead(BaseModel):
    id: uuid.UUID
    amount: Money
    description: str
    category: str
    date: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class ExpenseTotal(BaseModel):
    total: Money


class CategoryAmount(BaseModel):
    category: str
    amount: Money


class TodayByCategory(BaseModel):
    total: Money
    by_category: list[CategoryAmount]
