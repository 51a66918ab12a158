"""Promo card schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

TargetType = Literal["blog", "doctor", "external", "none"]


class PromoCardBase(CamelModel):
    """Base schema for promo card."""

    title: str = Field(..., min_length=1, max_length=200)
    highlight: str | None = Field(None, max_length=200)
    image_url: str = Field(..., min_length=1)
    display_order: int = 0
    doctor_id: int | None = None
    target_type: TargetType = "none"
    target_id: str | None = None
    target_url: str | None = None


class PromoCardCreate(PromoCardBase):
    """Schema for creating a promo card."""

    is_active: bool = True


class PromoCardUpdate(CamelModel):
    """Schema for updating a promo card."""

    title: str | None = Field(None, min_length=1, max_length=200)
    highlight: str | None = None
    image_url: str | None = Field(None, min_length=1)
    display_order: int | None = None
    doctor_id: int | None = None
    target_type: TargetType | None = None
    target_id: str | None = None
    target_url: str | None = None
    is_active: bool | None = None


class PromoCardOrder(CamelModel):
    """New position of one card."""

    id: int
    display_order: int


class PromoCardReorder(CamelModel):
    """Batch reorder request."""

    orders: list[PromoCardOrder] = Field(..., min_length=1)


class PromoCardResponse(PromoCardBase):
    """Promo card response schema."""

    id: int
    is_active: bool
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
