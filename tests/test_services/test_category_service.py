"""Category service tests: presets, custom categories, keyword matching."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.models.category import FALLBACK_CATEGORY, PRESET_CATEGORY_RULES
from pennypace.services import category_service

USER = "category-user"


def test_match_category_is_case_insensitive():
    rules = [("Coffee", ["latte"]), ("Food", ["lunch"])]
    assert category_service.match_category("Big LATTE", rules) == "Coffee"
    assert category_service.match_category("team lunch", rules) == "Food"
    assert category_service.match_category("bus", rules) is None
    assert category_service.match_category("", rules) is None


def test_match_category_first_rule_wins():
    rules = [("A", ["pizza"]), ("B", ["pizza"])]
    assert category_service.match_category("pizza night", rules) == "A"


@pytest.mark.parametrize(
    "description, expected",
    [
        ("Netflix subscription", "Bills & Utilities"),
        ("Uber to airport", "Transportation"),
        ("Amazon order", "Shopping"),
        ("Movie tickets", "Entertainment"),
        ("Gym membership", "Health & Fitness"),
        ("Tuition fee", "Education"),
        ("Pizza", "Food & Dining"),
    ],
)
def test_preset_rules(description, expected):
    assert category_service.match_category(description, category_service.preset_rules()) == expected


@pytest.mark.asyncio
async def test_seed_preset_categories_is_idempotent(db_session: AsyncSession):
    created = await category_service.seed_preset_categories(db_session)
    assert len(created) == len(PRESET_CATEGORY_RULES)
    assert all(c.is_preset and c.user_id is None for c in created)

    again = await category_service.seed_preset_categories(db_session)
    assert again == []


@pytest.mark.asyncio
async def test_categories_for_user_include_presets_and_own(db_session: AsyncSession):
    await category_service.seed_preset_categories(db_session)
    await category_service.create_user_category(
        db_session, user_id=USER, name=" Coffee ", keywords=["latte", " ", "espresso "]
    )
    await category_service.create_user_category(db_session, user_id="someone-else", name="Pets")

    categories = await category_service.get_categories_for_user(db_session, USER)
    names = [c.name for c in categories]

    assert "Coffee" in names
    assert "Pets" not in names
    assert FALLBACK_CATEGORY in names
    assert names == sorted(names)
    coffee = next(c for c in categories if c.name == "Coffee")
    assert coffee.keywords == ["latte", "espresso"]
    assert coffee.is_preset is False


@pytest.mark.asyncio
async def test_get_category_scoping(db_session: AsyncSession):
    mine = await category_service.create_user_category(db_session, user_id=USER, name="Coffee")

    assert await category_service.get_category(db_session, USER, mine.id) is mine
    assert await category_service.get_category(db_session, "someone-else", mine.id) is None


@pytest.mark.asyncio
async def test_update_and_delete_category(db_session: AsyncSession):
    cat = await category_service.create_user_category(db_session, user_id=USER, name="Coffee")

    await category_service.update_category(
        db_session, cat, {"name": " Cafes ", "keywords": ["flat white"], "icon": None}
    )
    assert cat.name == "Cafes"
    assert cat.keywords == ["flat white"]

    await category_service.delete_category(db_session, cat)
    assert await category_service.get_category(db_session, USER, cat.id) is None


@pytest.mark.asyncio
async def test_categorize_description(db_session: AsyncSession):
    await category_service.create_user_category(
        db_session, user_id=USER, name="Treats", keywords=["pizza"]
    )

    assert await category_service.categorize_description(db_session, USER, "Pizza") == "Treats"
    assert await category_service.categorize_description(db_session, "other", "Pizza") == "Food & Dining"
    assert await category_service.categorize_description(db_session, USER, "zzz") == FALLBACK_CATEGORY
