"""Shared test helpers."""

from httpx import AsyncClient

from app.core.exceptions import InvalidIdentityTokenException
from app.core.identity import SUPABASE, ExternalIdentity

ADMIN_EMAIL = "admin@clinic.test"
PASSWORD = "secret123"  # pragma: allowlist secret


class FakeIdentityVerifier:
    """Identity verifier that accepts a fixed set of tokens."""

    provider = SUPABASE

    def __init__(self) -> None:
        self.identities: dict[str, ExternalIdentity] = {}
        self.calls = 0

    def add(self, token: str, identity: ExternalIdentity) -> None:
        self.identities[token] = identity

    async def verify(self, token: str) -> ExternalIdentity:
        self.calls += 1
        try:
            return self.identities[token]
        except KeyError:
            raise InvalidIdentityTokenException() from None


def registration_payload(email: str, **overrides) -> dict:
    payload = {
        "fullName": "Ada Lovelace",
        "email": email,
        "mobileNumber": "+905551112233",
        "password": PASSWORD,
        "address": "Kadıköy, İstanbul",
        "kvkkConsent": True,
    }
    payload.update(overrides)
    return payload


async def register(client: AsyncClient, email: str, **overrides) -> dict:
    """Register a user and return the response body."""
    response = await client.post(
        "/api/v1/auth/register", json=registration_payload(email, **overrides)
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
