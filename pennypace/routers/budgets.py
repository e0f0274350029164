"""Budget routes: CRUD plus pacing and the weekly/monthly summaries.

Endpoints:
- GET /budgets/summary/overall: weekly pacing over all budgets
- GET /budgets/summary/monthly: per-category safe-to-spend for the month
- GET /budgets/{id}/pacing: pacing of one budget over its own period
"""

import uuid as uuid_mod

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.dependencies import get_db, get_user_id
from pennypace.models.budget import Budget
from pennypace.schemas.budget import (
    BudgetCreate,
    BudgetRead,
    BudgetSummaryRead,
    BudgetUpdate,
    PacingRead,
)
from pennypace.services import budget_service

router = APIRouter(prefix="/budgets", tags=["budgets"])


async def _get_or_404(db: AsyncSession, user_id: str, budget_id: str) -> Budget:
    try:
        bid = uuid_mod.UUID(budget_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid budget_id")
    budget = await budget_service.get_budget(db, user_id, bid)
    if budget is None:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.get("", response_model=list[BudgetRead])
async def list_budgets(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await budget_service.list_budgets(db, user_id)


@router.post("", status_code=201, response_model=BudgetRead)
async def upsert_budget(
    body: BudgetCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    """Create or replace the budget for ``body.category``."""
    return await budget_service.upsert_budget(
        db,
        user_id=user_id,
        category=body.category,
        amount=body.amount,
        period=body.period,
        weekday_amount=body.weekday_amount,
        weekend_amount=body.weekend_amount,
    )


@router.get("/summary/overall", response_model=PacingRead)
async def overall_summary(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await budget_service.overall_summary(db, user_id)


@router.get("/summary/monthly", response_model=BudgetSummaryRead)
async def monthly_summary(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    summary = await budget_service.monthly_summary(db, user_id)
    return BudgetSummaryRead.model_validate(summary)


@router.get("/{budget_id}", response_model=BudgetRead)
async def get_budget(
    budget_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await _get_or_404(db, user_id, budget_id)


@router.put("/{budget_id}", response_model=BudgetRead)
async def update_budget(
    budget_id: str,
    body: BudgetUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    budget = await _get_or_404(db, user_id, budget_id)
    return await budget_service.update_budget(
        db, budget, body.model_dump(exclude_unset=True)
    )


@router.delete("/{budget_id}")
async def delete_budget(
    budget_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    budget = await _get_or_404(db, user_id, budget_id)
    await budget_service.delete_budget(db, budget)
    return {"status": "deleted"}


@router.get("/{budget_id}/pacing", response_model=PacingRead)
async def budget_pacing(
    budget_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    budget = await _get_or_404(db, user_id, budget_id)
    return await budget_service.budget_pacing(db, user_id, budget)
