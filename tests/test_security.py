"""Tests for password hashing and access tokens."""

from datetime import timedelta

from app.core.security import (
    TokenSigner,
    create_access_token,
    generate_unusable_password_hash,
    get_password_hash,
    verify_password,
)


def test_password_hash_verifies():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_handles_missing_or_malformed_hash():
    assert not verify_password("secret123", "")
    assert not verify_password("", get_password_hash("secret123"))
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_unusable_hash_is_random():
    assert generate_unusable_password_hash() != generate_unusable_password_hash()


def test_signer_round_trip():
    signer = TokenSigner("signing-secret", expire_days=7)
    payload = signer.decode(signer.issue(42, "ada@example.com"))

    assert payload is not None
    assert payload["sub"] == "42"
    assert payload["email"] == "ada@example.com"
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


def test_signer_rejects_foreign_tokens():
    token = TokenSigner("signing-secret").issue(1, "ada@example.com")
    assert TokenSigner("other-secret").decode(token) is None
    assert TokenSigner("signing-secret").decode("not.a.jwt") is None


def test_signer_rejects_expired_tokens():
    token = create_access_token(
        {"sub": "1"}, secret_key="signing-secret", expires_delta=timedelta(seconds=-10)
    )
    assert TokenSigner("signing-secret").decode(token) is None


def test_signer_rejects_non_access_tokens():
    from jose import jwt

    token = jwt.encode({"sub": "1", "type": "refresh"}, "signing-secret", algorithm="HS256")
    assert TokenSigner("signing-secret").decode(token) is None
