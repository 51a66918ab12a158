"""Tests for announcement endpoints."""

from datetime import UTC, datetime, timedelta

from httpx import AsyncClient


def announcement(**overrides) -> dict:
    data = {
        "title": "Holiday opening hours",
        "description": "The clinic closes at 14:00 on Friday.",
        "type": "info",
        "priority": 2,
    }
    data.update(overrides)
    return data


async def create(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post(
        "/api/v1/announcements/", headers=headers, json=announcement(**overrides)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_active_list_orders_by_priority_and_skips_expired(
    client: AsyncClient, admin_headers: dict
):
    await create(client, admin_headers, title="Low", priority=1)
    await create(client, admin_headers, title="Urgent", priority=5, type="urgent")
    await create(
        client,
        admin_headers,
        title="Expired",
        priority=5,
        expiresAt=(datetime.now(UTC) - timedelta(days=1)).isoformat(),
    )
    await create(client, admin_headers, title="Inactive", isActive=False)

    response = await client.get("/api/v1/announcements/")

    assert response.status_code == 200
    assert [a["title"] for a in response.json()["data"]] == ["Urgent", "Low"]


async def test_active_list_filters_by_type_and_audience(client: AsyncClient, admin_headers: dict):
    await create(client, admin_headers, title="Everyone")
    await create(client, admin_headers, title="Staff only", targetAudience="staff")
    await create(client, admin_headers, title="Warning", type="warning")

    patients = await client.get("/api/v1/announcements/", params={"audience": "patients"})
    assert sorted(a["title"] for a in patients.json()["data"]) == ["Everyone", "Warning"]

    warnings = await client.get("/api/v1/announcements/", params={"type": "warning"})
    assert [a["title"] for a in warnings.json()["data"]] == ["Warning"]


async def test_invalid_priority_is_rejected(client: AsyncClient, admin_headers: dict):
    response = await client.post(
        "/api/v1/announcements/", headers=admin_headers, json=announcement(priority=9)
    )
    assert response.status_code == 400


async def test_promotional_announcement_is_rejected(client: AsyncClient, admin_headers: dict):
    response = await client.post(
        "/api/v1/announcements/",
        headers=admin_headers,
        json=announcement(title="Özel indirim"),
    )

    assert response.status_code == 400
    assert response.json()["forbiddenWords"] == ["indirim", "özel"]


async def test_admin_crud(client: AsyncClient, admin_headers: dict, user_headers: dict):
    created = await create(client, admin_headers)
    url = f"/api/v1/announcements/{created['id']}"

    assert (await client.get("/api/v1/announcements/admin", headers=user_headers)).status_code == 403

    updated = await client.put(url, headers=admin_headers, json={"priority": 4})
    assert updated.json()["data"]["priority"] == 4

    toggled = await client.patch(f"{url}/toggle-status", headers=admin_headers)
    assert toggled.json()["data"]["isActive"] is False

    listing = await client.get(
        "/api/v1/announcements/admin", params={"active": "false"}, headers=admin_headers
    )
    assert listing.json()["pagination"]["totalItems"] == 1

    assert (await client.delete(url, headers=admin_headers)).status_code == 200
    assert (await client.get(url)).status_code == 404
