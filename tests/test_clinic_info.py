"""Tests for clinic info and health endpoints."""

from httpx import AsyncClient
from sqlalchemy import select

from app.models.admin_logs import admin_logs


def clinic(**overrides) -> dict:
    data = {
        "name": "Gülüş Dental Clinic",
        "about": "Family dentistry in Kadıköy.",
        "phone": "+90 216 000 00 00",
        "workingHours": {"weekdays": "09:00-19:00", "saturday": "10:00-16:00"},
        "socialLinks": {"instagram": "https://instagram.com/clinic"},
    }
    data.update(overrides)
    return data


async def test_clinic_info_not_configured(client: AsyncClient):
    response = await client.get("/api/v1/clinic-info/")

    assert response.status_code == 404
    assert response.json()["success"] is False


async def test_upsert_keeps_a_single_record(client: AsyncClient, admin_headers: dict):
    created = await client.put("/api/v1/clinic-info/", headers=admin_headers, json=clinic())
    assert created.status_code == 200
    first_id = created.json()["data"]["id"]

    updated = await client.put(
        "/api/v1/clinic-info/", headers=admin_headers, json=clinic(name="Gülüş Dental")
    )
    assert updated.json()["data"]["id"] == first_id

    response = await client.get("/api/v1/clinic-info/")
    data = response.json()["data"]
    assert data["name"] == "Gülüş Dental"
    assert data["workingHours"]["saturday"] == "10:00-16:00"


async def test_upsert_requires_admin(client: AsyncClient, user_headers: dict):
    response = await client.put("/api/v1/clinic-info/", headers=user_headers, json=clinic())
    assert response.status_code == 403


async def test_contact_falls_back_to_placeholders(client: AsyncClient, admin_headers: dict):
    empty = await client.get("/api/v1/clinic-info/contact")
    assert empty.status_code == 200
    assert empty.json()["data"]["name"] == "Dental Clinic"
    assert empty.json()["data"]["email"] == "info@dentalclinic.com"

    await client.put(
        "/api/v1/clinic-info/",
        headers=admin_headers,
        json=clinic(email="hello@gulusdental.com", mapUrl="https://maps.example/g"),
    )

    data = (await client.get("/api/v1/clinic-info/contact")).json()["data"]
    assert data == {
        "name": "Gülüş Dental Clinic",
        "address": "Sample Address",
        "phone": "+90 216 000 00 00",
        "email": "hello@gulusdental.com",
        "mapUrl": "https://maps.example/g",
    }


async def test_working_hours_and_social_links_need_existing_info(
    client: AsyncClient, admin_headers: dict
):
    hours = await client.put(
        "/api/v1/clinic-info/working-hours",
        headers=admin_headers,
        json={"workingHours": {"weekdays": "08:00-20:00"}},
    )
    links = await client.put(
        "/api/v1/clinic-info/social-links",
        headers=admin_headers,
        json={"socialLinks": {"x": "https://x.com/clinic"}},
    )

    assert hours.status_code == 404
    assert links.status_code == 404


async def test_working_hours_and_social_links_replace_only_their_field(
    client: AsyncClient, admin_headers: dict, db_session
):
    await client.put("/api/v1/clinic-info/", headers=admin_headers, json=clinic())

    hours = await client.put(
        "/api/v1/clinic-info/working-hours",
        headers=admin_headers,
        json={"workingHours": {"weekdays": "08:00-20:00"}},
    )
    assert hours.status_code == 200
    assert hours.json()["data"]["workingHours"] == {"weekdays": "08:00-20:00"}
    assert hours.json()["data"]["socialLinks"] == {"instagram": "https://instagram.com/clinic"}

    links = await client.put(
        "/api/v1/clinic-info/social-links",
        headers=admin_headers,
        json={"socialLinks": {"x": "https://x.com/clinic"}},
    )
    data = links.json()["data"]
    assert data["socialLinks"] == {"x": "https://x.com/clinic"}
    assert data["workingHours"] == {"weekdays": "08:00-20:00"}
    assert data["name"] == "Gülüş Dental Clinic"

    actions = (await db_session.execute(select(admin_logs.c.action))).scalars().all()
    assert {"UPDATE_WORKING_HOURS", "UPDATE_SOCIAL_LINKS"} <= set(actions)


async def test_clinic_email_must_be_valid(client: AsyncClient, admin_headers: dict):
    response = await client.put(
        "/api/v1/clinic-info/", headers=admin_headers, json=clinic(email="clinic at example")
    )
    assert response.status_code == 400


async def test_health_and_ping(client: AsyncClient):
    health = await client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    ping = await client.get("/api/v1/ping")
    assert ping.json() == {"message": "pong"}
