"""Legal document schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

LegalKey = Literal["kvkk", "privacy", "terms"]
Language = Literal["tr", "en"]


class LegalDocumentCreate(CamelModel):
    """Schema for creating a legal document version."""

    key: LegalKey
    version: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1)
    language: Language = "tr"
    is_active: bool = False


class LegalDocumentUpdate(CamelModel):
    """Schema for updating a legal document version."""

    version: str | None = Field(None, min_length=1, max_length=20)
    title: str | None = Field(None, min_length=1, max_length=200)
    body: str | None = Field(None, min_length=1)


class LegalDocumentResponse(CamelModel):
    """Legal document response schema."""

    id: int | None = None
    key: LegalKey
    version: str
    title: str
    body: str
    language: Language
    is_active: bool
    published_at: datetime | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
