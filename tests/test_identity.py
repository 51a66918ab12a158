"""Tests for external identity verification."""

import httpx
import pytest

from app.core.exceptions import InvalidIdentityTokenException
from app.core.identity import (
    FIREBASE,
    SUPABASE,
    SupabaseIdentityVerifier,
    identity_from_firebase_claims,
    identity_from_supabase_user,
)

SUPABASE_USER = {
    "id": "7f1c2d4e-0000-4000-8000-000000000001",
    "email": "Ada@Example.com",
    "user_metadata": {"full_name": "Ada Lovelace", "avatar_url": "https://img.test/ada.png"},
    "app_metadata": {"provider": "google", "roles": ["Patient"]},
}


def make_verifier(handler) -> SupabaseIdentityVerifier:
    return SupabaseIdentityVerifier(
        "https://project.supabase.test/",
        "service-key",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


async def test_supabase_verifier_returns_identity():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["apikey"] = request.headers["apikey"]
        return httpx.Response(200, json=SUPABASE_USER)

    identity = await make_verifier(handler).verify("good-token")

    assert seen == {
        "url": "https://project.supabase.test/auth/v1/user",
        "auth": "Bearer good-token",
        "apikey": "service-key",
    }
    assert identity.subject == SUPABASE_USER["id"]
    assert identity.email == "Ada@Example.com"
    assert identity.provider == SUPABASE
    assert identity.name == "Ada Lovelace"
    assert identity.auth_provider == "google"
    assert identity.roles == ("patient",)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"msg": "invalid JWT"}),
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"email": "no-id@example.com"}),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
async def test_supabase_verifier_rejects_bad_responses(response):
    verifier = make_verifier(lambda request: response)
    with pytest.raises(InvalidIdentityTokenException):
        await verifier.verify("token")


async def test_supabase_verifier_maps_timeouts_to_invalid_token():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(InvalidIdentityTokenException):
        await make_verifier(handler).verify("token")


async def test_supabase_verifier_maps_transport_errors_to_invalid_token():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(InvalidIdentityTokenException):
        await make_verifier(handler).verify("token")


async def test_supabase_verifier_requires_token_and_configuration():
    verifier = make_verifier(lambda request: httpx.Response(200, json=SUPABASE_USER))
    with pytest.raises(InvalidIdentityTokenException):
        await verifier.verify("")

    unconfigured = SupabaseIdentityVerifier("", "")
    with pytest.raises(InvalidIdentityTokenException):
        await unconfigured.verify("token")


def test_supabase_identity_defaults_to_password_provider():
    identity = identity_from_supabase_user({"id": "abc", "email": "a@b.test"})
    assert identity.auth_provider == "password"
    assert identity.name is None
    assert identity.roles == ()


def test_firebase_identity_from_claims():
    identity = identity_from_firebase_claims(
        {
            "uid": "firebase-uid",
            "email": "ada@example.com",
            "name": "Ada",
            "picture": "https://img.test/a.png",
            "firebase": {"sign_in_provider": "google.com"},
            "role": "Admin",
        }
    )
    assert identity.provider == FIREBASE
    assert identity.subject == "firebase-uid"
    assert identity.auth_provider == "google"
    assert identity.roles == ("admin",)


def test_supabase_role_hints_come_from_app_metadata_only():
    identity = identity_from_supabase_user(
        {
            "id": "abc",
            "email": "a@b.test",
            "user_metadata": {"role": "admin"},
            "app_metadata": {"role": "Moderator"},
        }
    )
    assert identity.roles == ("moderator",)
