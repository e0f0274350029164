"""Category routes: presets + custom categories, and the keyword rules."""

import uuid as uuid_mod

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from pennypace.dependencies import get_db, get_user_id
from pennypace.models.category import Category
from pennypace.schemas.category import CategoryCreate, CategoryRead, CategoryRule, CategoryUpdate
from pennypace.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


async def _get_or_404(db: AsyncSession, user_id: str, category_id: str) -> Category:
    try:
        cid = uuid_mod.UUID(category_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid category_id")
    category = await category_service.get_category(db, user_id, cid)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _ensure_editable(category: Category) -> None:
    if category.is_preset:
        raise HTTPException(status_code=403, detail="Preset categories cannot be changed")


@router.get("", response_model=list[CategoryRead])
async def list_categories(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    await category_service.seed_preset_categories(db)
    return await category_service.get_categories_for_user(db, user_id)


@router.get("/defaults/list", response_model=list[CategoryRule])
async def list_default_rules():
    return [
        CategoryRule(name=name, keywords=keywords)
        for name, keywords in category_service.preset_rules()
    ]


@router.post("", status_code=201, response_model=CategoryRead)
async def create_category(
    body: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await category_service.create_user_category(
        db,
        user_id=user_id,
        name=body.name,
        keywords=body.keywords,
        icon=body.icon,
        color=body.color,
    )


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(
    category_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return await _get_or_404(db, user_id, category_id)


@router.put("/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    category = await _get_or_404(db, user_id, category_id)
    _ensure_editable(category)
    return await category_service.update_category(
        db, category, body.model_dump(exclude_unset=True)
    )


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    category = await _get_or_404(db, user_id, category_id)
    _ensure_editable(category)
    await category_service.delete_category(db, category)
    return {"status": "deleted"}
