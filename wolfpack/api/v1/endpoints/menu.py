"""Food & drink menu (read-only)."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_db
from wolfpack.schemas.menu import MenuCategoryResponse, MenuItemResponse
from wolfpack.services.menu_service import get_category_items, list_categories, list_menu_items

router = APIRouter(tags=["menu"])


@router.get("/menu-categories", response_model=list[MenuCategoryResponse])
async def categories(
    type: str | None = Query(None, description="food or drink"),
    db: AsyncSession = Depends(get_db),
):
    return await list_categories(db, type)


@router.get("/menu-items", response_model=list[MenuItemResponse])
async def menu_items(
    category_id: str | None = Query(None, description="Category id or name"),
    db: AsyncSession = Depends(get_db),
):
    return await list_menu_items(db, category_id)


@router.get("/menu-items/{category}", response_model=list[MenuItemResponse])
async def category_items(category: str, db: AsyncSession = Depends(get_db)):
    return await get_category_items(db, category)
