"""External identity providers.

A verifier takes the bearer token sent by a client, asks exactly one
provider who the token belongs to, and returns a normalized
``ExternalIdentity``. Verification never touches the local database.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
import structlog

from app.core.exceptions import InvalidIdentityTokenException
from app.core.firebase import verify_firebase_token

logger = structlog.get_logger(__name__)

SUPABASE = "supabase"
FIREBASE = "firebase"


@dataclass(frozen=True)
class ExternalIdentity:
    """Claims about a user as reported by an external identity provider."""

    subject: str | None
    email: str | None
    provider: str
    name: str | None = None
    avatar_url: str | None = None
    auth_provider: str = "password"
    roles: tuple[str, ...] = field(default_factory=tuple)


class IdentityVerifier(Protocol):
    """Turns a bearer token into an ExternalIdentity."""

    provider: str

    async def verify(self, token: str) -> ExternalIdentity: ...


def _collect_roles(*sources: dict[str, Any]) -> tuple[str, ...]:
    roles: list[str] = []
    for source in sources:
        role = source.get("role")
        if isinstance(role, str):
            roles.append(role.lower())
        many = source.get("roles")
        if isinstance(many, list):
            roles.extend(str(r).lower() for r in many)
    return tuple(dict.fromkeys(roles))


def identity_from_supabase_user(payload: dict[str, Any]) -> ExternalIdentity:
    """Normalize a Supabase ``/auth/v1/user`` response body."""
    user_metadata = payload.get("user_metadata") or {}
    app_metadata = payload.get("app_metadata") or {}

    provider_hint = app_metadata.get("provider")
    return ExternalIdentity(
        subject=payload.get("id"),
        email=payload.get("email"),
        provider=SUPABASE,
        name=user_metadata.get("full_name") or user_metadata.get("name"),
        avatar_url=user_metadata.get("avatar_url") or user_metadata.get("picture"),
        auth_provider="google" if provider_hint == "google" else "password",
        # user_metadata is editable by the user, so role hints come from app_metadata only
        roles=_collect_roles(app_metadata),
    )


def identity_from_firebase_claims(claims: dict[str, Any]) -> ExternalIdentity:
    """Normalize decoded Firebase ID token claims."""
    sign_in = (claims.get("firebase") or {}).get("sign_in_provider")
    return ExternalIdentity(
        subject=claims.get("uid") or claims.get("sub"),
        email=claims.get("email"),
        provider=FIREBASE,
        name=claims.get("name"),
        avatar_url=claims.get("picture"),
        auth_provider="google" if sign_in == "google.com" else "password",
        roles=_collect_roles(claims),
    )


class SupabaseIdentityVerifier:
    """Verifies Supabase access tokens against the project's auth endpoint."""

    provider = SUPABASE

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def verify(self, token: str) -> ExternalIdentity:
        """
        Verify a Supabase access token.

        Args:
            token: Bearer token from the client

        Returns:
            Normalized identity

        Raises:
            InvalidIdentityTokenException: On rejection, timeout, transport
                failure or malformed response
        """
        if not token:
            raise InvalidIdentityTokenException("Access denied. No token provided.")
        if not self.base_url:
            # Without a provider no external token can be trusted
            logger.error("supabase_not_configured")
            raise InvalidIdentityTokenException()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    f"{self.base_url}/auth/v1/user",
                    headers={
                        "Authorization": f"Bearer {token}",
                        "apikey": self.api_key,
                    },
                )
        except httpx.TimeoutException as e:
            logger.warning("supabase_verification_timeout", error=str(e))
            raise InvalidIdentityTokenException() from e
        except httpx.HTTPError as e:
            logger.warning("supabase_verification_unreachable", error=str(e))
            raise InvalidIdentityTokenException() from e

        if not response.is_success:
            logger.info("supabase_token_rejected", status_code=response.status_code)
            raise InvalidIdentityTokenException()

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("supabase_malformed_response", error=str(e))
            raise InvalidIdentityTokenException() from e

        if not isinstance(payload, dict) or not payload.get("id"):
            logger.warning("supabase_malformed_response", error="missing user id")
            raise InvalidIdentityTokenException()

        return identity_from_supabase_user(payload)


class FirebaseIdentityVerifier:
    """Verifies Firebase ID tokens with the Admin SDK."""

    provider = FIREBASE

    async def verify(self, token: str) -> ExternalIdentity:
        if not token:
            raise InvalidIdentityTokenException("Access denied. No token provided.")
        try:
            claims = await verify_firebase_token(token)
        except ValueError as e:
            raise InvalidIdentityTokenException() from e
        return identity_from_firebase_claims(claims)
