"""Blog schemas for request/response validation."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel


class BlogBase(CamelModel):
    """Base schema for blog post."""

    title: str = Field(..., min_length=1, max_length=200)
    summary: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    image_url: str | None = None
    author_name: str = Field(..., min_length=1, max_length=150)
    category: str = Field("General", max_length=100)
    tags: list[str] = Field(default_factory=list)
    is_featured: bool = False
    featured_order: int = 0


class BlogCreate(BlogBase):
    """Schema for creating a blog post."""

    is_published: bool = False


class BlogUpdate(CamelModel):
    """Schema for updating a blog post."""

    title: str | None = Field(None, min_length=1, max_length=200)
    summary: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = Field(None, min_length=1)
    image_url: str | None = None
    author_name: str | None = Field(None, min_length=1, max_length=150)
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    is_published: bool | None = None
    is_featured: bool | None = None
    featured_order: int | None = None


class BlogResponse(BlogBase):
    """Blog post response schema."""

    id: int
    slug: str
    author_id: int | None = None
    is_published: bool
    published_at: datetime | None = None
    read_time: int
    views: int
    likes: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
