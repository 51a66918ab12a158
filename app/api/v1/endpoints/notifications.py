"""In-app notification endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import AdminUser, CurrentUser, DatabaseSession, log_action
from app.schemas.base import (
    MessageResponse,
    PaginatedResponse,
    SuccessResponse,
    build_pagination,
)
from app.schemas.notifications import (
    BlogPublishedNotification,
    NotificationCreate,
    NotificationResponse,
    NotificationType,
    NotificationUpdate,
)
from app.services.notification_service import NotificationService

router = APIRouter()

NotificationServiceDep = Annotated[NotificationService, Depends(NotificationService)]


@router.get("/", response_model=SuccessResponse[list[NotificationResponse]])
async def list_active_notifications(
    db: DatabaseSession,
    service: NotificationServiceDep,
    type: NotificationType | None = Query(None, description="Filter by type"),
    limit: int = Query(20, ge=1, le=100),
):
    """The app's notification feed: active, due and unexpired."""
    items = await service.list_active(db, type_=type, limit=limit)
    return SuccessResponse[list[NotificationResponse]](
        data=[NotificationResponse.model_validate(n) for n in items]
    )


@router.get("/admin", response_model=PaginatedResponse[NotificationResponse])
async def list_all_notifications(
    db: DatabaseSession,
    service: NotificationServiceDep,
    admin: AdminUser,
    type: NotificationType | None = Query(None),
    active: bool | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """All notifications, including inactive, scheduled and expired ones."""
    items, total = await service.list_all(
        db, page=page, limit=limit, type_=type, is_active=active
    )
    return PaginatedResponse[NotificationResponse](
        items=[NotificationResponse.model_validate(n) for n in items],
        pagination=build_pagination(page, limit, total, len(items)),
    )


@router.post(
    "/blog-published",
    response_model=SuccessResponse[NotificationResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_BLOG_NOTIFICATION"))],
)
async def notify_blog_published(
    data: BlogPublishedNotification,
    db: DatabaseSession,
    service: NotificationServiceDep,
    admin: AdminUser,
):
    """Announce a newly published article to every reader."""
    notification = await service.create_blog_notification(db, data, created_by=admin["id"])
    return SuccessResponse[NotificationResponse](
        data=NotificationResponse.model_validate(notification)
    )


@router.get("/{notification_id}", response_model=SuccessResponse[NotificationResponse])
async def get_notification(
    notification_id: int, db: DatabaseSession, service: NotificationServiceDep
):
    """Get a notification by ID."""
    notification = await service.get_notification(db, notification_id)
    return SuccessResponse[NotificationResponse](
        data=NotificationResponse.model_validate(notification)
    )


@router.post(
    "/",
    response_model=SuccessResponse[NotificationResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_NOTIFICATION"))],
)
async def create_notification(
    data: NotificationCreate,
    db: DatabaseSession,
    service: NotificationServiceDep,
    admin: AdminUser,
):
    """
    Create a notification.

    - **type**: announcement, blog or other
    - **scheduledFor**: hidden from the feed until this time
    """
    notification = await service.create_notification(db, data, created_by=admin["id"])
    return SuccessResponse[NotificationResponse](
        data=NotificationResponse.model_validate(notification)
    )


@router.put(
    "/{notification_id}",
    response_model=SuccessResponse[NotificationResponse],
    dependencies=[Depends(log_action("UPDATE_NOTIFICATION"))],
)
async def update_notification(
    notification_id: int,
    data: NotificationUpdate,
    db: DatabaseSession,
    service: NotificationServiceDep,
    admin: AdminUser,
):
    """Update a notification."""
    notification = await service.update_notification(db, notification_id, data)
    return SuccessResponse[NotificationResponse](
        data=NotificationResponse.model_validate(notification)
    )


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_notification_read(
    notification_id: int, db: DatabaseSession, service: NotificationServiceDep, user: CurrentUser
):
    """Mark a notification as read."""
    await service.mark_read(db, notification_id)
    return MessageResponse(message="Notification marked as read")


@router.delete(
    "/{notification_id}",
    response_model=MessageResponse,
    dependencies=[Depends(log_action("DELETE_NOTIFICATION"))],
)
async def delete_notification(
    notification_id: int, db: DatabaseSession, service: NotificationServiceDep, admin: AdminUser
):
    """Delete a notification."""
    await service.delete_notification(db, notification_id)
    return MessageResponse(message="Notification deleted successfully")
