"""Bookmark schemas."""

from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.blogs import BlogResponse


class BookmarkResponse(CamelModel):
    """A bookmark together with the post it points at."""

    id: int
    blog_id: int
    created_at: datetime | None = None
    blog: BlogResponse


class BookmarkStatus(CamelModel):
    """Whether the caller has bookmarked a post."""

    success: bool = True
    bookmarked: bool
