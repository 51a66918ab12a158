"""Tests for doctor endpoints."""

from httpx import AsyncClient
from sqlalchemy import select

from app.models.admin_logs import admin_logs


async def create_doctor(client: AsyncClient, headers: dict, data: dict) -> dict:
    response = await client.post("/api/v1/doctors/", headers=headers, json=data)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_doctor_requires_admin(
    client: AsyncClient, user_headers: dict, sample_doctor_data: dict
):
    anonymous = await client.post("/api/v1/doctors/", json=sample_doctor_data)
    patient = await client.post("/api/v1/doctors/", headers=user_headers, json=sample_doctor_data)

    assert anonymous.status_code == 401
    assert patient.status_code == 403
    assert patient.json()["error"] == "Admin access required"


async def test_create_and_get_doctor(
    client: AsyncClient, admin_headers: dict, sample_doctor_data: dict
):
    doctor = await create_doctor(client, admin_headers, sample_doctor_data)

    assert doctor["fullName"] == "Dt. Ayşe Yılmaz"
    assert doctor["availableHours"]["monday"] == {"start": "09:00", "end": "18:00"}
    assert doctor["isActive"] is True

    response = await client.get(f"/api/v1/doctors/{doctor['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["specialty"] == "Orthodontics"


async def test_create_doctor_is_audited(
    client: AsyncClient, admin_headers: dict, sample_doctor_data: dict, db_session
):
    await create_doctor(client, admin_headers, sample_doctor_data)

    logs = (await db_session.execute(select(admin_logs))).mappings().all()
    assert [log["action"] for log in logs] == ["CREATE_DOCTOR"]
    assert logs[0]["method"] == "POST"
    assert logs[0]["endpoint"] == "/api/v1/doctors/"


async def test_get_missing_doctor(client: AsyncClient):
    response = await client.get("/api/v1/doctors/999")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Doctor not found",
        "type": "NotFoundException",
        "path": "http://test/api/v1/doctors/999",
    }


async def test_public_list_hides_inactive_and_sorts_by_rating(
    client: AsyncClient, admin_headers: dict, sample_doctor_data: dict
):
    await create_doctor(client, admin_headers, {**sample_doctor_data, "name": "Low", "rating": 3.9})
    await create_doctor(client, admin_headers, {**sample_doctor_data, "name": "High", "rating": 5.0})
    hidden = await create_doctor(
        client, admin_headers, {**sample_doctor_data, "name": "Hidden", "isActive": False}
    )

    response = await client.get("/api/v1/doctors/")
    assert response.status_code == 200
    body = response.json()
    assert [d["name"] for d in body["items"]] == ["High", "Low"]
    assert body["pagination"] == {"current": 1, "total": 1, "count": 2, "totalItems": 2}

    admin_list = await client.get("/api/v1/doctors/admin/all", headers=admin_headers)
    assert admin_list.json()["pagination"]["totalItems"] == 3

    inactive = await client.get(
        "/api/v1/doctors/admin/all", params={"active": "false"}, headers=admin_headers
    )
    assert [d["id"] for d in inactive.json()["items"]] == [hidden["id"]]


async def test_list_filters_by_specialty(
    client: AsyncClient, admin_headers: dict, sample_doctor_data: dict
):
    await create_doctor(client, admin_headers, sample_doctor_data)
    await create_doctor(
        client, admin_headers, {**sample_doctor_data, "specialty": "Periodontology"}
    )

    response = await client.get("/api/v1/doctors/", params={"specialty": "perio"})
    assert [d["specialty"] for d in response.json()["items"]] == ["Periodontology"]


async def test_update_toggle_and_delete_doctor(
    client: AsyncClient, admin_headers: dict, sample_doctor_data: dict
):
    doctor = await create_doctor(client, admin_headers, sample_doctor_data)
    url = f"/api/v1/doctors/{doctor['id']}"

    updated = await client.put(url, headers=admin_headers, json={"bio": "Braces and aligners"})
    assert updated.status_code == 200
    assert updated.json()["data"]["bio"] == "Braces and aligners"
    assert updated.json()["data"]["name"] == "Ayşe"

    toggled = await client.patch(f"{url}/toggle-status", headers=admin_headers)
    assert toggled.json()["data"]["isActive"] is False

    deleted = await client.delete(url, headers=admin_headers)
    assert deleted.status_code == 200
    assert (await client.get(url)).status_code == 404
    assert (await client.delete(url, headers=admin_headers)).status_code == 404


async def test_invalid_doctor_payload_is_400(client: AsyncClient, admin_headers: dict):
    response = await client.post(
        "/api/v1/doctors/", headers=admin_headers, json={"name": "No surname"}
    )
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["details"]


async def test_doctor_email_must_be_valid(
    client: AsyncClient, admin_headers: dict, sample_doctor_data: dict
):
    response = await client.post(
        "/api/v1/doctors/", headers=admin_headers, json={**sample_doctor_data, "email": "ayse@"}
    )
    assert response.status_code == 400

    doctor = await create_doctor(
        client, admin_headers, {**sample_doctor_data, "email": "ayse@gulusdental.com"}
    )
    assert doctor["email"] == "ayse@gulusdental.com"
