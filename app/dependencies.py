"""FastAPI dependencies."""

from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.crypto import FieldCipher
from app.core.exceptions import (
    ForbiddenException,
    IncompleteIdentityException,
    UnauthorizedException,
)
from app.core.identity import (
    FIREBASE,
    FirebaseIdentityVerifier,
    IdentityVerifier,
    SupabaseIdentityVerifier,
)
from app.core.redis_client import CacheManager, get_redis_client
from app.core.security import TokenSigner
from app.database import get_db
from app.services.audit_service import AuditService
from app.services.reconciliation_service import AccountReconciler
from app.services.user_service import UserService

# Security
security = HTTPBearer(auto_error=False)

# Provider role hints that grant admin access
ADMIN_ROLE_HINTS = frozenset({"admin", "moderator"})


@lru_cache
def get_field_cipher() -> FieldCipher:
    """Field cipher keyed from settings."""
    return FieldCipher(settings.field_encryption_key)


@lru_cache
def get_token_signer() -> TokenSigner:
    """Access token signer keyed from settings."""
    return TokenSigner(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.access_token_expire_days,
    )


def get_identity_verifier() -> IdentityVerifier:
    """Verifier for the configured external identity provider."""
    if settings.identity_provider == FIREBASE:
        return FirebaseIdentityVerifier()
    return SupabaseIdentityVerifier(
        settings.supabase_url,
        settings.supabase_service_key,
        timeout=settings.identity_provider_timeout_seconds,
    )


def get_cache_manager() -> CacheManager | None:
    """Cache manager backed by the shared Redis client."""
    return CacheManager(get_redis_client())


def get_account_reconciler(
    cipher: Annotated[FieldCipher, Depends(get_field_cipher)],
) -> AccountReconciler:
    """Account reconciler configured from settings."""
    return AccountReconciler(
        cipher,
        auto_consent=settings.kvkk_auto_consent_external,
        kvkk_version=settings.kvkk_current_version,
    )


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Access denied. No token provided.")
    return credentials.credentials


async def _resolve_user(
    token: str,
    db: AsyncSession,
    cipher: FieldCipher,
    signer: TokenSigner,
    reconciler: AccountReconciler,
    verifier: IdentityVerifier,
) -> dict:
    """
    Map a bearer token to a user row.

    Locally issued tokens are checked first. Anything else is verified with
    the external identity provider and reconciled into a local account; the
    provider's role hints are kept on the row as ``provider_roles``.
    """
    payload = signer.decode(token)

    if payload is None:
        identity = await verifier.verify(token)
        user = await reconciler.reconcile(db, identity)
        user["provider_roles"] = identity.roles
        return user

    try:
        user_id = int(payload.get("sub", ""))
    except (TypeError, ValueError):
        raise UnauthorizedException("Invalid token") from None
    user = await UserService(cipher).get_user_by_id(db, user_id)
    if not user:
        raise UnauthorizedException("User not found")
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
    cipher: Annotated[FieldCipher, Depends(get_field_cipher)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
    reconciler: Annotated[AccountReconciler, Depends(get_account_reconciler)],
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
) -> dict:
    """
    Resolve the bearer token to a local user row.

    Raises:
        UnauthorizedException: Missing or invalid token, or unknown user
        ForbiddenException: Account deactivated
    """
    token = _bearer_token(credentials)
    user = await _resolve_user(token, db, cipher, signer, reconciler, verifier)

    if not user["is_active"]:
        raise ForbiddenException("User account is deactivated")

    return user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
    cipher: Annotated[FieldCipher, Depends(get_field_cipher)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
    reconciler: Annotated[AccountReconciler, Depends(get_account_reconciler)],
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
) -> dict | None:
    """
    The caller's active user row, or None for anonymous callers.

    Accepts the same tokens as ``get_current_user``. A token that cannot be
    verified, or one that belongs to a deactivated account, reads as
    anonymous.
    """
    if credentials is None or not credentials.credentials:
        return None

    try:
        user = await _resolve_user(
            credentials.credentials, db, cipher, signer, reconciler, verifier
        )
    except (UnauthorizedException, IncompleteIdentityException):
        return None

    if not user["is_active"]:
        return None
    return user


def is_admin_user(user: dict, cipher: FieldCipher) -> bool:
    """Admins have the admin role, an admin role hint from the provider, or an allowlisted email."""
    if user["role"] == "admin":
        return True
    if ADMIN_ROLE_HINTS.intersection(user.get("provider_roles") or ()):
        return True
    return cipher.decrypt(user["email"]) in settings.admin_emails


async def require_admin(
    user: Annotated[dict, Depends(get_current_user)],
    cipher: Annotated[FieldCipher, Depends(get_field_cipher)],
) -> dict:
    """
    Require an admin caller.

    Raises:
        ForbiddenException: Caller is not an admin
    """
    if not is_admin_user(user, cipher):
        raise ForbiddenException("Admin access required")
    return user


def log_action(action: str) -> Callable[..., Awaitable[None]]:
    """
    Build a dependency that records an admin action in the audit log.

    A failed write is logged and never blocks the request.
    """

    async def _log(
        request: Request,
        admin: Annotated[dict, Depends(require_admin)],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> None:
        await AuditService().record(
            db,
            admin_id=admin["id"],
            action=action,
            method=request.method,
            endpoint=str(request.url.path),
            ip=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )

    return _log


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CacheManagerDep = Annotated[CacheManager | None, Depends(get_cache_manager)]
Cipher = Annotated[FieldCipher, Depends(get_field_cipher)]
Signer = Annotated[TokenSigner, Depends(get_token_signer)]
Verifier = Annotated[IdentityVerifier, Depends(get_identity_verifier)]
Reconciler = Annotated[AccountReconciler, Depends(get_account_reconciler)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
OptionalUser = Annotated[dict | None, Depends(get_optional_user)]
AdminUser = Annotated[dict, Depends(require_admin)]
