"""Bookmark endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.dependencies import CurrentUser, DatabaseSession
from app.schemas.base import MessageResponse, SuccessResponse
from app.schemas.bookmarks import BookmarkResponse, BookmarkStatus
from app.services.bookmark_service import BookmarkService

router = APIRouter()

BookmarkServiceDep = Annotated[BookmarkService, Depends(BookmarkService)]


@router.get("/", response_model=SuccessResponse[list[BookmarkResponse]])
async def list_bookmarks(
    db: DatabaseSession, service: BookmarkServiceDep, current_user: CurrentUser
):
    """The caller's bookmarked posts."""
    items = await service.list_bookmarks(db, current_user["id"])
    return SuccessResponse[list[BookmarkResponse]](
        data=[BookmarkResponse.model_validate(b) for b in items]
    )


@router.get("/check/{blog_id}", response_model=BookmarkStatus)
async def check_bookmark(
    blog_id: int, db: DatabaseSession, service: BookmarkServiceDep, current_user: CurrentUser
):
    """Whether the caller has bookmarked a post."""
    return BookmarkStatus(
        bookmarked=await service.is_bookmarked(db, current_user["id"], blog_id)
    )


@router.post("/{blog_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_bookmark(
    blog_id: int, db: DatabaseSession, service: BookmarkServiceDep, current_user: CurrentUser
):
    """Bookmark a published post."""
    await service.add_bookmark(db, current_user["id"], blog_id)
    return MessageResponse(message="Blog bookmarked")


@router.delete("/{blog_id}", response_model=MessageResponse)
async def remove_bookmark(
    blog_id: int, db: DatabaseSession, service: BookmarkServiceDep, current_user: CurrentUser
):
    """Remove a bookmark."""
    await service.remove_bookmark(db, current_user["id"], blog_id)
    return MessageResponse(message="Bookmark removed")
