"""Insight routes: weekly insights, under-budget streak, weekly review."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.dependencies import get_db, get_user_id
from pennypace.schemas.insight import ReviewRead, StreakRead, WeeklyInsightsRead
from pennypace.services import insight_service, streak_service

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("/weekly", response_model=WeeklyInsightsRead)
async def weekly_insights(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await insight_service.weekly_insights(db, user_id)


@router.get("/streak", response_model=StreakRead)
async def get_streak(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    """Update the streak with this week's result, then return it."""
    return await streak_service.refresh_streak(db, user_id)


@router.get("/review", response_model=ReviewRead)
async def weekly_review(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await insight_service.weekly_review(db, user_id)
