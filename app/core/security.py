"""Security utilities for JWT and password handling."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def generate_unusable_password_hash() -> str:
    """Hash a random secret nobody knows, for accounts without a local password."""
    return get_password_hash(secrets.token_urlsafe(32))


def create_access_token(
    data: dict[str, Any],
    secret_key: str,
    expires_delta: timedelta,
    algorithm: str = "HS256",
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode
        secret_key: Signing secret
        expires_delta: Lifetime from issuance
        algorithm: Signing algorithm

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(UTC)

    to_encode.update(
        {
            "exp": now + expires_delta,
            "iat": now,
            "type": "access",
        }
    )

    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict[str, Any] | None:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token to decode
        secret_key: Signing secret
        algorithm: Expected signing algorithm

    Returns:
        Decoded payload or None if invalid
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None

    # Verify token type
    if payload.get("type") != "access":
        return None

    return payload


class TokenSigner:
    """Issues and validates local access tokens with one signing secret."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        if not secret_key:
            raise ValueError("JWT signing secret is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(days=expire_days)

    def issue(self, user_id: int, email: str) -> str:
        """Mint an access token for a local user."""
        return create_access_token(
            {"sub": str(user_id), "email": email},
            secret_key=self.secret_key,
            expires_delta=self.expires_delta,
            algorithm=self.algorithm,
        )

    def decode(self, token: str) -> dict[str, Any] | None:
        """Return the token payload, or None if the token is not ours or has expired."""
        return decode_access_token(token, self.secret_key, self.algorithm)
