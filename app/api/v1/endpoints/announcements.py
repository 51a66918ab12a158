"""Announcement endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import AdminUser, DatabaseSession, log_action
from app.schemas.announcements import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementType,
    AnnouncementUpdate,
    TargetAudience,
)
from app.schemas.base import (
    MessageResponse,
    PaginatedResponse,
    SuccessResponse,
    build_pagination,
)
from app.services.announcement_service import AnnouncementService

router = APIRouter()

AnnouncementServiceDep = Annotated[AnnouncementService, Depends(AnnouncementService)]


@router.get("/", response_model=SuccessResponse[list[AnnouncementResponse]])
async def list_active_announcements(
    db: DatabaseSession,
    service: AnnouncementServiceDep,
    type: AnnouncementType | None = Query(None, description="Filter by type"),
    audience: TargetAudience | None = Query(None, description="Target audience"),
    limit: int = Query(20, ge=1, le=100),
):
    """Active announcements that have not expired."""
    items = await service.list_active(db, type_=type, audience=audience, limit=limit)
    return SuccessResponse[list[AnnouncementResponse]](
        data=[AnnouncementResponse.model_validate(a) for a in items]
    )


@router.get("/admin", response_model=PaginatedResponse[AnnouncementResponse])
async def list_all_announcements(
    db: DatabaseSession,
    service: AnnouncementServiceDep,
    admin: AdminUser,
    active: bool | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """All announcements, including inactive and expired ones."""
    items, total = await service.list_all(db, page=page, limit=limit, is_active=active)
    return PaginatedResponse[AnnouncementResponse](
        items=[AnnouncementResponse.model_validate(a) for a in items],
        pagination=build_pagination(page, limit, total, len(items)),
    )


@router.get("/{announcement_id}", response_model=SuccessResponse[AnnouncementResponse])
async def get_announcement(
    announcement_id: int, db: DatabaseSession, service: AnnouncementServiceDep
):
    """Get an announcement by ID."""
    announcement = await service.get_announcement(db, announcement_id)
    return SuccessResponse[AnnouncementResponse](
        data=AnnouncementResponse.model_validate(announcement)
    )


@router.post(
    "/",
    response_model=SuccessResponse[AnnouncementResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_ANNOUNCEMENT"))],
)
async def create_announcement(
    data: AnnouncementCreate,
    db: DatabaseSession,
    service: AnnouncementServiceDep,
    admin: AdminUser,
):
    """
    Create an announcement.

    - **priority**: 1 (lowest) to 5
    - **targetAudience**: all, patients or staff
    """
    announcement = await service.create_announcement(db, data, created_by=admin["id"])
    return SuccessResponse[AnnouncementResponse](
        data=AnnouncementResponse.model_validate(announcement)
    )


@router.put(
    "/{announcement_id}",
    response_model=SuccessResponse[AnnouncementResponse],
    dependencies=[Depends(log_action("UPDATE_ANNOUNCEMENT"))],
)
async def update_announcement(
    announcement_id: int,
    data: AnnouncementUpdate,
    db: DatabaseSession,
    service: AnnouncementServiceDep,
    admin: AdminUser,
):
    """Update an announcement."""
    announcement = await service.update_announcement(db, announcement_id, data)
    return SuccessResponse[AnnouncementResponse](
        data=AnnouncementResponse.model_validate(announcement)
    )


@router.patch(
    "/{announcement_id}/toggle-status",
    response_model=SuccessResponse[AnnouncementResponse],
    dependencies=[Depends(log_action("TOGGLE_ANNOUNCEMENT_STATUS"))],
)
async def toggle_announcement_status(
    announcement_id: int, db: DatabaseSession, service: AnnouncementServiceDep, admin: AdminUser
):
    """Activate or deactivate an announcement."""
    announcement = await service.toggle_status(db, announcement_id)
    return SuccessResponse[AnnouncementResponse](
        data=AnnouncementResponse.model_validate(announcement)
    )


@router.delete(
    "/{announcement_id}",
    response_model=MessageResponse,
    dependencies=[Depends(log_action("DELETE_ANNOUNCEMENT"))],
)
async def delete_announcement(
    announcement_id: int, db: DatabaseSession, service: AnnouncementServiceDep, admin: AdminUser
):
    """Delete an announcement."""
    await service.delete_announcement(db, announcement_id)
    return MessageResponse(message="Announcement deleted successfully")
