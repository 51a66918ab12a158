"""Tests for in-app notification endpoints."""

from datetime import UTC, datetime, timedelta

from httpx import AsyncClient
from sqlalchemy import select

from app.models.admin_logs import admin_logs


def notification(**overrides) -> dict:
    data = {
        "title": "Clinic closed on Monday",
        "message": "We reopen on Tuesday at 09:00.",
        "type": "announcement",
    }
    data.update(overrides)
    return data


async def create(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post(
        "/api/v1/notifications/", headers=headers, json=notification(**overrides)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_blog(client: AsyncClient, headers: dict, data: dict) -> dict:
    response = await client.post("/api/v1/blogs/", headers=headers, json=data)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_applies_defaults(client: AsyncClient, admin_headers: dict):
    created = await create(client, admin_headers, type="other", title="Parking update")

    assert created["type"] == "other"
    assert created["targetAudience"] == "all"
    assert created["isActive"] is True
    assert created["isRead"] is False
    assert created["blog"] is None


async def test_feed_hides_inactive_expired_and_scheduled(client: AsyncClient, admin_headers: dict):
    await create(client, admin_headers, title="First")
    await create(client, admin_headers, title="Second")
    await create(client, admin_headers, title="Hidden", isActive=False)
    await create(
        client,
        admin_headers,
        title="Expired",
        expiresAt=(datetime.now(UTC) - timedelta(hours=1)).isoformat(),
    )
    await create(
        client,
        admin_headers,
        title="Tomorrow",
        scheduledFor=(datetime.now(UTC) + timedelta(days=1)).isoformat(),
    )

    response = await client.get("/api/v1/notifications/")

    assert response.status_code == 200
    assert [n["title"] for n in response.json()["data"]] == ["Second", "First"]


async def test_feed_filters_by_type(client: AsyncClient, admin_headers: dict):
    await create(client, admin_headers, title="Notice")
    await create(client, admin_headers, title="Misc", type="other")

    response = await client.get("/api/v1/notifications/", params={"type": "other"})

    assert [n["title"] for n in response.json()["data"]] == ["Misc"]


async def test_admin_list_includes_inactive_and_pages(client: AsyncClient, admin_headers: dict):
    await create(client, admin_headers, title="Visible")
    await create(client, admin_headers, title="Hidden", isActive=False)

    everything = await client.get(
        "/api/v1/notifications/admin", params={"limit": 1}, headers=admin_headers
    )
    assert everything.status_code == 200
    assert everything.json()["pagination"]["totalItems"] == 2
    assert len(everything.json()["items"]) == 1

    inactive = await client.get(
        "/api/v1/notifications/admin", params={"active": "false"}, headers=admin_headers
    )
    assert [n["title"] for n in inactive.json()["items"]] == ["Hidden"]


async def test_admin_list_requires_admin(client: AsyncClient, user_headers: dict):
    assert (await client.get("/api/v1/notifications/admin")).status_code == 401
    response = await client.get("/api/v1/notifications/admin", headers=user_headers)
    assert response.status_code == 403


async def test_promotional_notifications_are_rejected(client: AsyncClient, admin_headers: dict):
    response = await client.post(
        "/api/v1/notifications/",
        headers=admin_headers,
        json=notification(message="Free whitening this week"),
    )
    assert response.status_code == 400
    assert response.json()["forbiddenWords"] == ["free"]

    created = await create(client, admin_headers)
    response = await client.put(
        f"/api/v1/notifications/{created['id']}",
        headers=admin_headers,
        json={"title": "Yaz kampanyası"},
    )
    assert response.status_code == 400
    assert response.json()["forbiddenWords"] == ["kampanya"]


async def test_update_changes_only_sent_fields(client: AsyncClient, admin_headers: dict):
    created = await create(client, admin_headers)

    response = await client.put(
        f"/api/v1/notifications/{created['id']}",
        headers=admin_headers,
        json={"isActive": False},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["isActive"] is False
    assert data["title"] == created["title"]


async def test_mark_read_requires_sign_in(
    client: AsyncClient, admin_headers: dict, user_headers: dict
):
    created = await create(client, admin_headers)
    url = f"/api/v1/notifications/{created['id']}/read"

    assert (await client.patch(url)).status_code == 401
    response = await client.patch(url, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Notification marked as read"

    fetched = await client.get(f"/api/v1/notifications/{created['id']}")
    assert fetched.json()["data"]["isRead"] is True

    missing = await client.patch("/api/v1/notifications/9999/read", headers=user_headers)
    assert missing.status_code == 404


async def test_blog_published_links_the_article(
    client: AsyncClient, admin_headers: dict, sample_blog_data: dict
):
    blog = await create_blog(client, admin_headers, sample_blog_data)

    response = await client.post(
        "/api/v1/notifications/blog-published",
        headers=admin_headers,
        json={"blogId": blog["id"]},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["title"] == "New Article Published"
    assert data["message"] == f"Check out our latest article: {blog['title']}"
    assert data["type"] == "blog"
    assert data["blog"] == {
        "id": blog["id"],
        "title": blog["title"],
        "imageUrl": None,
        "slug": blog["slug"],
    }

    feed = await client.get("/api/v1/notifications/", params={"type": "blog"})
    assert feed.json()["data"][0]["blog"]["slug"] == blog["slug"]


async def test_blog_published_for_unknown_article_is_404(client: AsyncClient, admin_headers: dict):
    response = await client.post(
        "/api/v1/notifications/blog-published",
        headers=admin_headers,
        json={"blogId": 9999, "blogTitle": "Ghost"},
    )
    assert response.status_code == 404


async def test_delete_is_audited(client: AsyncClient, admin_headers: dict, db_session):
    created = await create(client, admin_headers)

    response = await client.delete(
        f"/api/v1/notifications/{created['id']}", headers=admin_headers
    )
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/notifications/{created['id']}")).status_code == 404
    assert (
        await client.delete(f"/api/v1/notifications/{created['id']}", headers=admin_headers)
    ).status_code == 404

    actions = (await db_session.execute(select(admin_logs.c.action))).scalars().all()
    assert "CREATE_NOTIFICATION" in actions
    assert "DELETE_NOTIFICATION" in actions
