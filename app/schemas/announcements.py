"""Announcement schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

AnnouncementType = Literal["info", "warning", "success", "urgent"]
TargetAudience = Literal["all", "patients", "staff"]


class AnnouncementBase(CamelModel):
    """Base schema for announcement."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    image_url: str | None = None
    type: AnnouncementType = "info"
    priority: int = Field(1, ge=1, le=5)
    target_audience: TargetAudience = "all"
    expires_at: datetime | None = None


class AnnouncementCreate(AnnouncementBase):
    """Schema for creating an announcement."""

    is_active: bool = True


class AnnouncementUpdate(CamelModel):
    """Schema for updating an announcement."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1)
    image_url: str | None = None
    type: AnnouncementType | None = None
    priority: int | None = Field(None, ge=1, le=5)
    target_audience: TargetAudience | None = None
    expires_at: datetime | None = None
    is_active: bool | None = None


class AnnouncementResponse(AnnouncementBase):
    """Announcement response schema."""

    id: int
    is_active: bool
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
