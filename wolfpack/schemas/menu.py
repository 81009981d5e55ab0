"""Pydantic schemas for the food & drink menu."""
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel


class MenuCategoryResponse(BaseModel):
    id: UUID
    name: str
    type: str
    display_order: int = 0

    model_config = {"from_attributes": True}


class MenuItemResponse(BaseModel):
    id: UUID
    category_id: UUID
    category_name: str
    name: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
    is_available: bool = True
    display_order: int = 0
