"""Tests for Expo push registration and broadcast."""

import json

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.api.v1.endpoints.push import get_push_service
from app.main import app
from app.models.push_tokens import push_tokens
from app.services.push_service import PushService, chunk_messages, is_expo_push_token

PUSH_URL = "https://exp.host/--/api/v2/push/send"


def expo_token(n: int) -> str:
    return f"ExponentPushToken[device-{n}]"


def test_is_expo_push_token():
    assert is_expo_push_token("ExponentPushToken[abc]")
    assert is_expo_push_token("ExpoPushToken[abc]")
    assert not is_expo_push_token("fcm-token")
    assert not is_expo_push_token("ExpoPushToken[]")
    assert not is_expo_push_token(None)


def test_chunk_messages():
    chunks = chunk_messages([{"to": str(i)} for i in range(250)])
    assert [len(c) for c in chunks] == [100, 100, 50]


async def test_register_token_upserts(client: AsyncClient, user_headers: dict, db_session):
    anonymous = await client.post(
        "/api/v1/push/register", json={"token": expo_token(1), "platform": "ios"}
    )
    assert anonymous.status_code == 200

    again = await client.post(
        "/api/v1/push/register",
        headers=user_headers,
        json={"token": expo_token(1), "platform": "ios"},
    )
    assert again.status_code == 200

    rows = (await db_session.execute(select(push_tokens))).mappings().all()
    assert len(rows) == 1
    assert rows[0]["user_id"] is not None


async def test_register_rejects_non_expo_tokens(client: AsyncClient):
    response = await client.post("/api/v1/push/register", json={"token": "not-a-token"})
    assert response.status_code == 400


@pytest.fixture
def expo_requests() -> list[list[dict]]:
    return []


@pytest.fixture
def push_service(expo_requests) -> PushService:
    def handler(request: httpx.Request) -> httpx.Response:
        batch = json.loads(request.content)
        expo_requests.append(batch)
        if len(expo_requests) == 2:
            return httpx.Response(500, json={"errors": [{"message": "boom"}]})
        tickets = [
            {"status": "error", "message": "DeviceNotRegistered"}
            if message["to"] == expo_token(0)
            else {"status": "ok", "id": message["to"]}
            for message in batch
        ]
        return httpx.Response(200, json={"data": tickets})

    service = PushService(PUSH_URL, transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_push_service] = lambda: service
    return service


async def test_broadcast_chunks_and_counts(
    client: AsyncClient, admin_headers: dict, db_session, push_service, expo_requests
):
    await db_session.execute(
        push_tokens.insert(), [{"token": expo_token(n), "platform": "android"} for n in range(205)]
    )
    await db_session.execute(push_tokens.insert().values(token="legacy-fcm-token"))
    await db_session.commit()

    response = await client.post(
        "/api/v1/push/broadcast",
        headers=admin_headers,
        json={"title": "Clinic closed", "body": "Closed on Monday.", "data": {"screen": "home"}},
    )

    assert response.status_code == 200
    assert [len(batch) for batch in expo_requests] == [100, 100, 5]
    assert expo_requests[0][0]["title"] == "Clinic closed"
    assert expo_requests[0][0]["data"] == {"screen": "home"}
    # second chunk fails wholesale, one ticket in the first chunk is an error
    assert response.json() == {
        "success": True,
        "total": 206,
        "sent": 104,
        "failed": 101,
        "skipped": 1,
    }


async def test_broadcast_requires_admin(client: AsyncClient, user_headers: dict, push_service):
    response = await client.post(
        "/api/v1/push/broadcast", headers=user_headers, json={"title": "Hi", "body": "There"}
    )
    assert response.status_code == 403
