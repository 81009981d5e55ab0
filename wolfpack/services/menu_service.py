"""Food & drink menu queries."""
from uuid import UUID

from sqlalchemy import asc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.core.errors import NotFoundError
from wolfpack.models.menu import MenuCategory, MenuItem
from wolfpack.schemas.menu import MenuItemResponse


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


async def list_categories(db: AsyncSession, category_type: str | None = None) -> list[MenuCategory]:
    stmt = (
        select(MenuCategory)
        .where(MenuCategory.is_active.is_(True))
        .order_by(asc(MenuCategory.display_order), asc(MenuCategory.name))
    )
    if category_type:
        stmt = stmt.where(MenuCategory.type == category_type)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def resolve_category(db: AsyncSession, category: str) -> MenuCategory | None:
    """Look a category up by id, or by name ignoring case."""
    category_id = _as_uuid(category)
    if category_id is not None:
        stmt = select(MenuCategory).where(MenuCategory.id == category_id)
    else:
        stmt = select(MenuCategory).where(func.lower(MenuCategory.name) == category.strip().lower())
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none()


async def list_menu_items(
    db: AsyncSession,
    category: str | None = None,
    *,
    available_only: bool = True,
) -> list[MenuItemResponse]:
    """Menu items joined with their category, optionally filtered to one category.

    An unknown category yields an empty list rather than an error.
    """
    stmt = (
        select(MenuItem, MenuCategory.name)
        .join(MenuCategory, MenuItem.category_id == MenuCategory.id)
        .where(MenuCategory.is_active.is_(True))
        .order_by(asc(MenuCategory.display_order), asc(MenuItem.display_order), asc(MenuItem.name))
    )
    if available_only:
        stmt = stmt.where(MenuItem.is_available.is_(True))
    if category:
        found = await resolve_category(db, category)
        if found is None:
            return []
        stmt = stmt.where(MenuItem.category_id == found.id)

    result = await db.execute(stmt)
    return [
        MenuItemResponse(
            id=item.id,
            category_id=item.category_id,
            category_name=category_name,
            name=item.name,
            description=item.description,
            price=item.price,
            image_url=item.image_url,
            is_available=item.is_available,
            display_order=item.display_order or 0,
        )
        for item, category_name in result.all()
    ]


async def get_category_items(db: AsyncSession, category: str) -> list[MenuItemResponse]:
    """Items of one category; 404 when the category does not exist."""
    found = await resolve_category(db, category)
    if found is None:
        raise NotFoundError("Category")
    return await list_menu_items(db, str(found.id))
