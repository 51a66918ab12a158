"""In-app notification schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.announcements import TargetAudience
from app.schemas.base import CamelModel

NotificationType = Literal["announcement", "blog", "other"]


class NotificationBlog(CamelModel):
    """The linked article, as shown on a notification card."""

    id: int
    title: str
    image_url: str | None = None
    slug: str


class NotificationBase(CamelModel):
    """Base schema for notification."""

    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: NotificationType = "other"
    blog_id: int | None = None
    user_id: int | None = None
    target_audience: TargetAudience = "all"
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None


class NotificationCreate(NotificationBase):
    """Schema for creating a notification."""

    is_active: bool = True


class NotificationUpdate(CamelModel):
    """Schema for updating a notification. Only sent fields change."""

    title: str | None = Field(None, min_length=1, max_length=200)
    message: str | None = Field(None, min_length=1)
    type: NotificationType | None = None
    blog_id: int | None = None
    user_id: int | None = None
    target_audience: TargetAudience | None = None
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None
    is_active: bool | None = None


class BlogPublishedNotification(CamelModel):
    """Announce a newly published article."""

    blog_id: int
    blog_title: str | None = Field(None, min_length=1, max_length=200)


class NotificationResponse(NotificationBase):
    """Notification response schema."""

    id: int
    is_read: bool
    is_active: bool
    blog: NotificationBlog | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
