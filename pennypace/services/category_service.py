"""Category service: seed presets, custom categories, keyword auto-categorization.

Preset categories are shared by every user and cannot be edited or deleted.
"""

import logging
import uuid
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.models.category import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    FALLBACK_CATEGORY,
    PRESET_CATEGORY_RULES,
    Category,
)

logger = logging.getLogger("pennypace.categories")

_UPDATABLE_FIELDS = ("name", "keywords", "icon", "color")


def match_category(description: str, rules: Iterable[tuple[str, list[str]]]) -> str | None:
    """First rule whose keyword occurs in the description (case-insensitive)."""
    if not description:
        return None
    text = description.lower()
    for name, keywords in rules:
        if any(keyword and keyword.lower() in text for keyword in keywords):
            return name
    return None


def preset_rules() -> list[tuple[str, list[str]]]:
    return list(PRESET_CATEGORY_RULES.items())


async def seed_preset_categories(db: AsyncSession) -> list[Category]:
    """Seed all preset categories if they don't already exist. Idempotent."""
    result = await db.execute(
        select(Category).where(Category.is_preset == True)  # noqa: E712
    )
    existing = {c.name for c in result.scalars().all()}

    created = []
    for name, keywords in PRESET_CATEGORY_RULES.items():
        if name not in existing:
            cat = Category(
                name=name,
                keywords=list(keywords),
                icon=DEFAULT_ICON,
                color=DEFAULT_COLOR,
                is_preset=True,
                user_id=None,
            )
            db.add(cat)
            created.append(cat)

    if created:
        await db.flush()
        logger.info("Seeded %d preset categories", len(created))

    return created


async def get_categories_for_user(db: AsyncSession, user_id: str) -> list[Category]:
    """Return preset categories + the user's custom categories, by name."""
    result = await db.execute(
        select(Category)
        .where(
            (Category.is_preset == True) | (Category.user_id == user_id)  # noqa: E712
        )
        .order_by(Category.name)
    )
    return list(result.scalars().all())


async def get_category(
    db: AsyncSession, user_id: str, category_id: uuid.UUID
) -> Category | None:
    """A preset or one of the user's own categories."""
    result = await db.execute(
        select(Category).where(
            Category.id == category_id,
            (Category.is_preset == True) | (Category.user_id == user_id),  # noqa: E712
        )
    )
    return result.scalar_one_or_none()


async def create_user_category(
    db: AsyncSession,
    *,
    user_id: str,
    name: str,
    keywords: list[str] | None = None,
    icon: str = DEFAULT_ICON,
    color: str = DEFAULT_COLOR,
) -> Category:
    cat = Category(
        user_id=user_id,
        name=name.strip(),
        keywords=[k.strip() for k in keywords or [] if k.strip()],
        icon=icon,
        color=color,
        is_preset=False,
    )
    db.add(cat)
    await db.flush()

    logger.info("category.created id=%s name=%s", cat.id, cat.name)
    return cat


async def update_category(db: AsyncSession, category: Category, changes: dict) -> Category:
    for field in _UPDATABLE_FIELDS:
        if changes.get(field) is None:
            continue
        value = changes[field]
        if field == "name":
            value = value.strip()
        elif field == "keywords":
            value = [k.strip() for k in value if k.strip()]
        setattr(category, field, value)
    await db.flush()
    return category


async def delete_category(db: AsyncSession, category: Category) -> None:
    await db.delete(category)
    await db.flush()
    logger.info("category.deleted id=%s", category.id)


async def categorize_description(db: AsyncSession, user_id: str, description: str) -> str:
    """Pick a category name for an expense description.

    The user's own category keywords are tried first, then the preset rules.
    Falls back to "Other".
    """
    result = await db.execute(
        select(Category)
        .where(Category.user_id == user_id)
        .order_by(Category.created_at.asc())
    )
    custom_rules = [(c.name, c.keywords or []) for c in result.scalars().all()]

    return (
        match_category(description, custom_rules)
        or match_category(description, preset_rules())
        or FALLBACK_CATEGORY
    )
