import uuid
from decimal import Decimal

import pytest

from wolfpack.models.menu import MenuCategory, MenuItem


@pytest.fixture
async def menu(session_maker):
    async with session_maker() as session:
        tacos = MenuCategory(name="Tacos", type="food", display_order=1)
        cocktails = MenuCategory(name="Cocktails", type="drink", display_order=2)
        retired = MenuCategory(name="Brunch", type="food", display_order=0, is_active=False)
        session.add_all([tacos, cocktails, retired])
        await session.flush()
        session.add_all(
            [
                MenuItem(category_id=tacos.id, name="Birria", price=Decimal("14.00"), display_order=1),
                MenuItem(category_id=tacos.id, name="Al Pastor", price=Decimal("12.50"), display_order=0),
                MenuItem(category_id=tacos.id, name="Sold Out Special", price=Decimal("9.00"), is_available=False),
                MenuItem(category_id=cocktails.id, name="Wolf Bite", price=Decimal("11.00")),
                MenuItem(category_id=retired.id, name="Chilaquiles", price=Decimal("10.00")),
            ]
        )
        await session.commit()
        return {"tacos": tacos, "cocktails": cocktails, "retired": retired}


async def test_categories_by_type(client, menu):
    everything = (await client.get("/api/v1/menu-categories")).json()
    assert [c["name"] for c in everything] == ["Tacos", "Cocktails"]

    drinks = (await client.get("/api/v1/menu-categories", params={"type": "drink"})).json()
    assert [c["name"] for c in drinks] == ["Cocktails"]


async def test_items_are_joined_with_category_and_ordered(client, menu):
    items = (await client.get("/api/v1/menu-items")).json()
    assert [i["name"] for i in items] == ["Al Pastor", "Birria", "Wolf Bite"]
    assert items[0]["category_name"] == "Tacos"
    assert Decimal(items[0]["price"]) == Decimal("12.50")


async def test_items_filtered_by_category_id_or_name(client, menu):
    by_id = (await client.get("/api/v1/menu-items", params={"category_id": str(menu["cocktails"].id)})).json()
    assert [i["name"] for i in by_id] == ["Wolf Bite"]

    by_name = (await client.get("/api/v1/menu-items", params={"category_id": "tacos"})).json()
    assert [i["name"] for i in by_name] == ["Al Pastor", "Birria"]


async def test_unknown_category_filter_is_empty(client, menu):
    response = await client.get("/api/v1/menu-items", params={"category_id": "Desserts"})
    assert response.status_code == 200
    assert response.json() == []


async def test_category_items_endpoint(client, menu):
    items = (await client.get("/api/v1/menu-items/Cocktails")).json()
    assert [i["name"] for i in items] == ["Wolf Bite"]

    missing = await client.get(f"/api/v1/menu-items/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["details"] == {"resource": "Category"}
