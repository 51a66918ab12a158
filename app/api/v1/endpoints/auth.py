"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.dependencies import (
    Cipher,
    CurrentUser,
    DatabaseSession,
    Reconciler,
    Signer,
    Verifier,
    security,
)
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
)
from app.schemas.base import MessageResponse
from app.schemas.users import UserProfile, UserUpdate
from app.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(cipher: Cipher, signer: Signer, reconciler: Reconciler) -> AuthService:
    """Get auth service instance."""
    return AuthService(
        cipher,
        signer,
        reconciler=reconciler,
        kvkk_version=settings.kvkk_current_version,
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def _auth_response(auth_service: AuthService, user: dict, token: str) -> AuthResponse:
    return AuthResponse(
        token=token,
        user=UserProfile.model_validate(auth_service.users.to_profile(user)),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a local account",
)
async def register(
    data: RegisterRequest, db: DatabaseSession, auth_service: AuthServiceDep
) -> AuthResponse:
    """
    Register with name, email, mobile number, password and KVKK consent.

    The email is normalized before it is encrypted and stored; the response
    echoes the normalized form.
    """
    user, token = await auth_service.register(db, data)
    return _auth_response(auth_service, user, token)


@router.post("/login", response_model=AuthResponse, summary="Password login")
async def login(
    data: LoginRequest, db: DatabaseSession, auth_service: AuthServiceDep
) -> AuthResponse:
    """Exchange email and password for an access token."""
    user, token = await auth_service.login(db, data.email, data.password)
    return _auth_response(auth_service, user, token)


@router.post("/sync", response_model=AuthResponse, summary="Sync external identity")
async def sync_external_user(
    db: DatabaseSession,
    auth_service: AuthServiceDep,
    verifier: Verifier,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthResponse:
    """
    Verify an identity provider token and link it to a local account.

    Creates the account on first sign-in and returns a local access token.
    """
    if credentials is None:
        raise UnauthorizedException("Access denied. No token provided.")
    user, token = await auth_service.sync_external_user(db, credentials.credentials, verifier)
    return _auth_response(auth_service, user, token)


@router.get("/profile", response_model=ProfileResponse, summary="Current user profile")
async def get_profile(current_user: CurrentUser, auth_service: AuthServiceDep) -> ProfileResponse:
    """Get the signed-in user's decrypted profile."""
    return ProfileResponse(
        user=UserProfile.model_validate(auth_service.users.to_profile(current_user))
    )


@router.put("/profile", response_model=ProfileResponse, summary="Update profile")
async def update_profile(
    data: UserUpdate,
    current_user: CurrentUser,
    db: DatabaseSession,
    auth_service: AuthServiceDep,
) -> ProfileResponse:
    """Update full name, mobile number and address."""
    user = await auth_service.update_profile(db, current_user["id"], data)
    return ProfileResponse(user=UserProfile.model_validate(auth_service.users.to_profile(user)))


@router.put("/change-password", response_model=MessageResponse, summary="Change password")
async def change_password(
    data: ChangePasswordRequest,
    current_user: CurrentUser,
    db: DatabaseSession,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    """Change the password after checking the current one."""
    await auth_service.change_password(
        db, current_user["id"], data.current_password, data.new_password
    )
    return MessageResponse(message="Password changed successfully")
