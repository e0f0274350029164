from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.models.budget import Budget
from pennypace.pacing import PeriodKind


@pytest.mark.asyncio
async def test_create_budget_defaults(db_session: AsyncSession):
    budget = Budget(user_id="u1", category="Food", amount=Decimal("250.00"))
    db_session.add(budget)
    await db_session.commit()
    db_session.expunge_all()

    result = await db_session.execute(select(Budget).where(Budget.user_id == "u1"))
    fetched = result.scalar_one()
    assert fetched.period == PeriodKind.monthly
    assert fetched.amount == Decimal("250.00")
    assert fetched.has_separate_budgets is False
    assert fetched.created_at is not None


@pytest.mark.asyncio
async def test_split_amounts(db_session: AsyncSession):
    budget = Budget(
        user_id="u1", category="Food", amount=Decimal("0"),
        weekday_amount=Decimal("20"), weekend_amount=Decimal("50"),
    )
    db_session.add(budget)
    await db_session.commit()

    assert budget.has_separate_budgets is True


@pytest.mark.asyncio
async def test_one_budget_per_category(db_session: AsyncSession):
    db_session.add(Budget(user_id="u1", category="Food", amount=Decimal("10")))
    db_session.add(Budget(user_id="u1", category="Food", amount=Decimal("20")))

    with pytest.raises(IntegrityError):
        await db_session.commit()


@pytest.mark.asyncio
async def test_same_category_for_different_users(db_session: AsyncSession):
    db_session.add(Budget(user_id="u1", category="Food", amount=Decimal("10")))
    db_session.add(Budget(user_id="u2", category="Food", amount=Decimal("20")))
    await db_session.commit()

    result = await db_session.execute(select(Budget))
    assert len(result.scalars().all()) == 2


@pytest.mark.asyncio
async def test_half_split_rejected_by_database(db_session: AsyncSession):
    db_session.add(
        Budget(user_id="u1", category="Food", amount=Decimal("10"), weekday_amount=Decimal("5"))
    )

    with pytest.raises(IntegrityError):
        await db_session.commit()


@pytest.mark.asyncio
async def test_negative_amount_rejected_by_database(db_session: AsyncSession):
    db_session.add(Budget(user_id="u1", category="Food", amount=Decimal("-1")))

    with pytest.raises(IntegrityError):
        await db_session.commit()
