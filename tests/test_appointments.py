"""Tests for appointment endpoints."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.models.appointments import appointments
from tests.utils import bearer, register

SLOT_DATE = (date.today() + timedelta(days=3)).isoformat()


@pytest.fixture
async def doctor_id(client: AsyncClient, admin_headers: dict, sample_doctor_data: dict) -> int:
    response = await client.post("/api/v1/doctors/", headers=admin_headers, json=sample_doctor_data)
    return response.json()["data"]["id"]


def booking(doctor_id: int, **overrides) -> dict:
    data = {
        "doctorId": doctor_id,
        "patientName": "Ada Lovelace",
        "patientPhone": "+905551112233",
        "patientEmail": "ada@clinic.com",
        "appointmentDate": SLOT_DATE,
        "appointmentTime": "10:30",
        "treatmentType": "Check-up",
    }
    data.update(overrides)
    return data


async def book(client: AsyncClient, headers: dict, doctor_id: int, **overrides):
    return await client.post(
        "/api/v1/appointments/", headers=headers, json=booking(doctor_id, **overrides)
    )


async def test_book_appointment_encrypts_contact_details(
    client: AsyncClient, user_headers: dict, doctor_id: int, db_session, cipher
):
    response = await book(client, user_headers, doctor_id)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "scheduled"
    assert data["patientPhone"] == "+905551112233"
    assert data["doctorName"] == "Dt. Ayşe Yılmaz"

    stored = (await db_session.execute(select(appointments))).mappings().one()
    assert stored["patient_phone"] != "+905551112233"
    assert cipher.decrypt(stored["patient_phone"]) == "+905551112233"
    assert cipher.decrypt(stored["patient_email"]) == "ada@clinic.com"


async def test_booking_requires_authentication(client: AsyncClient, doctor_id: int):
    response = await client.post("/api/v1/appointments/", json=booking(doctor_id))
    assert response.status_code == 401


async def test_taken_slot_is_rejected(client: AsyncClient, user_headers: dict, doctor_id: int):
    assert (await book(client, user_headers, doctor_id)).status_code == 201

    response = await book(client, user_headers, doctor_id)

    assert response.status_code == 400
    assert response.json()["error"] == "Time slot not available"


async def test_cancelled_slot_can_be_rebooked(
    client: AsyncClient, user_headers: dict, doctor_id: int
):
    first = (await book(client, user_headers, doctor_id)).json()["data"]
    await client.patch(f"/api/v1/appointments/{first['id']}/cancel", headers=user_headers)

    assert (await book(client, user_headers, doctor_id)).status_code == 201


async def test_inactive_or_missing_doctor_is_rejected(
    client: AsyncClient, user_headers: dict, admin_headers: dict, doctor_id: int
):
    await client.patch(f"/api/v1/doctors/{doctor_id}/toggle-status", headers=admin_headers)

    inactive = await book(client, user_headers, doctor_id)
    missing = await book(client, user_headers, 999)

    assert inactive.status_code == missing.status_code == 400
    assert inactive.json()["error"] == "Doctor not available"


async def test_invalid_time_is_rejected(client: AsyncClient, user_headers: dict, doctor_id: int):
    response = await book(client, user_headers, doctor_id, appointmentTime="25:00")
    assert response.status_code == 400


async def test_invalid_patient_email_is_rejected(
    client: AsyncClient, user_headers: dict, doctor_id: int
):
    response = await book(client, user_headers, doctor_id, patientEmail="not-an-email")
    assert response.status_code == 400


async def test_patients_only_see_their_own(
    client: AsyncClient, user_headers: dict, admin_headers: dict, doctor_id: int
):
    mine = (await book(client, user_headers, doctor_id)).json()["data"]
    other = bearer((await register(client, "other@clinic.test"))["token"])

    listing = await client.get("/api/v1/appointments/my-appointments", headers=user_headers)
    assert [a["id"] for a in listing.json()["items"]] == [mine["id"]]

    empty = await client.get("/api/v1/appointments/my-appointments", headers=other)
    assert empty.json()["items"] == []

    url = f"/api/v1/appointments/{mine['id']}"
    assert (await client.get(url, headers=user_headers)).status_code == 200
    assert (await client.get(url, headers=other)).status_code == 403
    assert (await client.get(url, headers=admin_headers)).status_code == 200
    assert (await client.patch(f"{url}/cancel", headers=other)).status_code == 403


async def test_admin_status_update_and_filters(
    client: AsyncClient, user_headers: dict, admin_headers: dict, doctor_id: int
):
    first = (await book(client, user_headers, doctor_id)).json()["data"]
    await book(client, user_headers, doctor_id, appointmentTime="11:00")

    assert (
        await client.patch(
            f"/api/v1/appointments/{first['id']}/status",
            headers=user_headers,
            json={"status": "confirmed"},
        )
    ).status_code == 403

    response = await client.patch(
        f"/api/v1/appointments/{first['id']}/status",
        headers=admin_headers,
        json={"status": "confirmed", "notes": "Bring x-rays"},
    )
    assert response.json()["data"]["status"] == "confirmed"
    assert response.json()["data"]["notes"] == "Bring x-rays"

    confirmed = await client.get(
        "/api/v1/appointments/admin",
        params={"status": "confirmed", "doctorId": doctor_id, "date": SLOT_DATE},
        headers=admin_headers,
    )
    assert [a["id"] for a in confirmed.json()["items"]] == [first["id"]]


async def test_completed_appointment_cannot_be_cancelled(
    client: AsyncClient, user_headers: dict, admin_headers: dict, doctor_id: int
):
    appointment = (await book(client, user_headers, doctor_id)).json()["data"]
    url = f"/api/v1/appointments/{appointment['id']}"
    await client.patch(f"{url}/status", headers=admin_headers, json={"status": "completed"})

    response = await client.patch(f"{url}/cancel", headers=user_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot cancel completed appointment"
