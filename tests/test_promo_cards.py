"""Tests for promo card endpoints."""

from httpx import AsyncClient


async def create(client: AsyncClient, headers: dict, title: str, order: int, **extra) -> dict:
    response = await client.post(
        "/api/v1/promo-cards/",
        headers=headers,
        json={
            "title": title,
            "imageUrl": f"https://img.test/{order}.png",
            "displayOrder": order,
            **extra,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_public_list_is_ordered_and_active_only(client: AsyncClient, admin_headers: dict):
    await create(client, admin_headers, "Second", 2)
    await create(client, admin_headers, "First", 1)
    await create(client, admin_headers, "Hidden", 0, isActive=False)

    public = await client.get("/api/v1/promo-cards/")
    assert [c["title"] for c in public.json()["data"]] == ["First", "Second"]

    everything = await client.get("/api/v1/promo-cards/admin", headers=admin_headers)
    assert [c["title"] for c in everything.json()["data"]] == ["Hidden", "First", "Second"]


async def test_reorder(client: AsyncClient, admin_headers: dict):
    a = await create(client, admin_headers, "A", 1)
    b = await create(client, admin_headers, "B", 2)

    response = await client.put(
        "/api/v1/promo-cards/reorder",
        headers=admin_headers,
        json={"orders": [{"id": a["id"], "displayOrder": 2}, {"id": b["id"], "displayOrder": 1}]},
    )

    assert response.status_code == 200
    assert [c["title"] for c in response.json()["data"]] == ["B", "A"]


async def test_reorder_unknown_card_changes_nothing(client: AsyncClient, admin_headers: dict):
    a = await create(client, admin_headers, "A", 1)

    response = await client.put(
        "/api/v1/promo-cards/reorder",
        headers=admin_headers,
        json={"orders": [{"id": a["id"], "displayOrder": 7}, {"id": 999, "displayOrder": 1}]},
    )

    assert response.status_code == 404
    card = await client.get(f"/api/v1/promo-cards/{a['id']}")
    assert card.json()["data"]["displayOrder"] == 1


async def test_update_toggle_delete(client: AsyncClient, admin_headers: dict, user_headers: dict):
    card = await create(client, admin_headers, "A", 1)
    url = f"/api/v1/promo-cards/{card['id']}"

    assert (await client.put(url, headers=user_headers, json={"title": "X"})).status_code == 403

    updated = await client.put(url, headers=admin_headers, json={"highlight": "New"})
    assert updated.json()["data"]["highlight"] == "New"

    toggled = await client.patch(f"{url}/toggle-status", headers=admin_headers)
    assert toggled.json()["data"]["isActive"] is False

    assert (await client.delete(url, headers=admin_headers)).status_code == 200
    assert (await client.get(url)).status_code == 404
