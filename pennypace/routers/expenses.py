"""Expense routes: one-tap entry, list/filter, edit, delete, totals."""

import uuid as uuid_mod
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.dependencies import get_db, get_user_id
from pennypace.schemas.expense import (
    CategoryAmount,
    ExpenseCreate,
    ExpenseRead,
    ExpenseTotal,
    ExpenseUpdate,
    TodayByCategory,
)
from pennypace.services import expense_service

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _parse_expense_id(expense_id: str) -> uuid_mod.UUID:
    try:
        return uuid_mod.UUID(expense_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid expense_id")


async def _get_or_404(db: AsyncSession, user_id: str, expense_id: str):
    expense = await expense_service.get_expense(db, user_id, _parse_expense_id(expense_id))
    if expense is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.get("", response_model=list[ExpenseRead])
async def list_expenses(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    category: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await expense_service.list_expenses(
        db,
        user_id,
        start_date=start_date,
        end_date=end_date,
        category=category,
        limit=limit,
    )


@router.post("", status_code=201, response_model=ExpenseRead)
async def create_expense(
    body: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await expense_service.create_expense(
        db,
        user_id=user_id,
        amount=body.amount,
        description=body.description,
        category=body.category,
        date=body.date,
    )


@router.get("/stats/total", response_model=ExpenseTotal)
async def total_spent(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    total = await expense_service.total_spent(
        db, user_id, start_date=start_date, end_date=end_date
    )
    return ExpenseTotal(total=total)


@router.get("/today/by-category", response_model=TodayByCategory)
async def today_by_category(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    total, ranked = await expense_service.today_by_category(db, user_id)
    return TodayByCategory(
        total=total,
        by_category=[CategoryAmount(category=c, amount=a) for c, a in ranked],
    )


@router.get("/{expense_id}", response_model=ExpenseRead)
async def get_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await _get_or_404(db, user_id, expense_id)


@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: str,
    body: ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    expense = await _get_or_404(db, user_id, expense_id)
    return await expense_service.update_expense(
        db, expense, body.model_dump(exclude_unset=True)
    )


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    expense = await _get_or_404(db, user_id, expense_id)
    await expense_service.delete_expense(db, expense)
    return {"status": "deleted"}
