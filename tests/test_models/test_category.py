import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.models.category import DEFAULT_COLOR, DEFAULT_ICON, Category


@pytest.mark.asyncio
async def test_create_preset_category(db_session: AsyncSession):
    cat = Category(name="Groceries", keywords=["grocery"], is_preset=True)
    db_session.add(cat)
    await db_session.commit()

    result = await db_session.execute(select(Category).where(Category.name == "Groceries"))
    fetched = result.scalar_one()
    assert fetched.is_preset is True
    assert fetched.user_id is None  # preset
    assert fetched.icon == DEFAULT_ICON
    assert fetched.color == DEFAULT_COLOR


@pytest.mark.asyncio
async def test_keywords_round_trip_as_json(db_session: AsyncSession):
    cat = Category(name="Coffee", user_id="u1", keywords=["latte", "flat white"])
    db_session.add(cat)
    await db_session.commit()
    db_session.expunge_all()

    result = await db_session.execute(select(Category).where(Category.name == "Coffee"))
    fetched = result.scalar_one()
    assert fetched.keywords == ["latte", "flat white"]
    assert fetched.is_preset is False
