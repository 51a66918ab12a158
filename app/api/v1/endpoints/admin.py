"""Admin area endpoints."""

from fastapi import APIRouter, Depends, Query

from app.config import settings
from app.core.exceptions import NotFoundException
from app.dependencies import AdminUser, Cipher, DatabaseSession, log_action
from app.schemas.admin import AdminIdentity, AdminLogResponse, LogCleanupResult
from app.schemas.base import PaginatedResponse, SuccessResponse, build_pagination
from app.schemas.users import UserProfile, UserRoleUpdate, UserStatusUpdate
from app.services.audit_service import AuditService
from app.services.user_service import UserService

router = APIRouter()


@router.get("/me", response_model=AdminIdentity)
async def admin_me(admin: AdminUser, cipher: Cipher):
    """The signed-in admin and how their access was granted."""
    email = cipher.decrypt(admin["email"])
    return AdminIdentity(
        id=admin["id"],
        email=email,
        full_name=admin["full_name"],
        role=admin["role"],
        via_allowlist=admin["role"] != "admin" and email in settings.admin_emails,
    )


@router.get("/users", response_model=PaginatedResponse[UserProfile])
async def list_users(
    db: DatabaseSession,
    admin: AdminUser,
    cipher: Cipher,
    active: bool | None = Query(None, description="Filter by account state"),
    search: str | None = Query(None, description="Search by name"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """List users with decrypted contact details."""
    user_service = UserService(cipher)
    rows, total = await user_service.list_users(
        db, page=page, limit=limit, is_active=active, search=search
    )
    return PaginatedResponse[UserProfile](
        items=[UserProfile.model_validate(user_service.to_profile(u)) for u in rows],
        pagination=build_pagination(page, limit, total, len(rows)),
    )


@router.get("/users/{user_id}", response_model=SuccessResponse[UserProfile])
async def get_user(user_id: int, db: DatabaseSession, admin: AdminUser, cipher: Cipher):
    """Get a user by ID."""
    user_service = UserService(cipher)
    user = await user_service.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundException("User not found")
    return SuccessResponse[UserProfile](
        data=UserProfile.model_validate(user_service.to_profile(user))
    )


@router.patch(
    "/users/{user_id}/toggle-status",
    response_model=SuccessResponse[UserProfile],
    dependencies=[Depends(log_action("TOGGLE_USER_STATUS"))],
)
async def toggle_user_status(
    user_id: int,
    db: DatabaseSession,
    admin: AdminUser,
    cipher: Cipher,
    data: UserStatusUpdate | None = None,
):
    """Activate or deactivate an account. Without a body the state is flipped."""
    user_service = UserService(cipher)
    user = await user_service.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundException("User not found")

    is_active = data.is_active if data and data.is_active is not None else not user["is_active"]
    user = await user_service.set_active(db, user_id, is_active)
    return SuccessResponse[UserProfile](
        data=UserProfile.model_validate(user_service.to_profile(user))
    )


@router.patch(
    "/users/{user_id}/role",
    response_model=SuccessResponse[UserProfile],
    dependencies=[Depends(log_action("UPDATE_USER_ROLE"))],
)
async def update_user_role(
    user_id: int,
    data: UserRoleUpdate,
    db: DatabaseSession,
    admin: AdminUser,
    cipher: Cipher,
):
    """Assign a role."""
    user_service = UserService(cipher)
    if not await user_service.get_user_by_id(db, user_id):
        raise NotFoundException("User not found")
    user = await user_service.set_role(db, user_id, data.role)
    return SuccessResponse[UserProfile](
        data=UserProfile.model_validate(user_service.to_profile(user))
    )


@router.get("/logs", response_model=PaginatedResponse[AdminLogResponse])
async def list_admin_logs(
    db: DatabaseSession,
    admin: AdminUser,
    action: str | None = Query(None),
    admin_id: int | None = Query(None, alias="adminId"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
):
    """Audit log, newest first."""
    rows, total = await AuditService().list_logs(
        db, page=page, limit=limit, action=action, admin_id=admin_id
    )
    return PaginatedResponse[AdminLogResponse](
        items=[AdminLogResponse.model_validate(r) for r in rows],
        pagination=build_pagination(page, limit, total, len(rows)),
    )


@router.delete("/logs/cleanup", response_model=LogCleanupResult)
async def cleanup_admin_logs(
    db: DatabaseSession,
    admin: AdminUser,
    days: int = Query(30, ge=1, description="Delete entries older than this many days"),
):
    """Prune old audit entries."""
    return LogCleanupResult(deleted=await AuditService().cleanup(db, days))
