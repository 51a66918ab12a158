"""Blog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import (
    AdminUser,
    Cipher,
    CurrentUser,
    DatabaseSession,
    OptionalUser,
    is_admin_user,
    log_action,
)
from app.schemas.base import (
    MessageResponse,
    PaginatedResponse,
    SuccessResponse,
    build_pagination,
)
from app.schemas.blogs import BlogCreate, BlogResponse, BlogUpdate
from app.services.blog_service import BlogService

router = APIRouter()

BlogServiceDep = Annotated[BlogService, Depends(BlogService)]


def _page(items: list[dict], total: int, page: int, limit: int) -> PaginatedResponse:
    return PaginatedResponse[BlogResponse](
        items=[BlogResponse.model_validate(b) for b in items],
        pagination=build_pagination(page, limit, total, len(items)),
    )


@router.get("/", response_model=PaginatedResponse[BlogResponse])
async def list_blogs(
    db: DatabaseSession,
    blog_service: BlogServiceDep,
    category: str | None = Query(None, description="Filter by category"),
    author: str | None = Query(None, description="Filter by author name"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """List published posts. Featured posts come first."""
    items, total = await blog_service.list_blogs(
        db, page=page, limit=limit, published_only=True, category=category, author=author
    )
    return _page(items, total, page, limit)


@router.get("/admin", response_model=PaginatedResponse[BlogResponse])
async def list_blogs_admin(
    db: DatabaseSession,
    blog_service: BlogServiceDep,
    admin: AdminUser,
    is_published: bool | None = Query(None, alias="isPublished"),
    category: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """List every post, drafts included."""
    items, total = await blog_service.list_blogs(
        db,
        page=page,
        limit=limit,
        published_only=False,
        category=category,
        is_published=is_published,
    )
    return _page(items, total, page, limit)


@router.get("/{blog_id}", response_model=SuccessResponse[BlogResponse])
async def get_blog(
    blog_id: int,
    db: DatabaseSession,
    blog_service: BlogServiceDep,
    user: OptionalUser,
    cipher: Cipher,
):
    """
    Read a post.

    Drafts are only visible to admins. Reading a published post counts a view.
    """
    include_unpublished = user is not None and is_admin_user(user, cipher)
    blog = await blog_service.view_blog(db, blog_id, include_unpublished)
    return SuccessResponse[BlogResponse](data=BlogResponse.model_validate(blog))


@router.post(
    "/",
    response_model=SuccessResponse[BlogResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_BLOG"))],
)
async def create_blog(
    data: BlogCreate, db: DatabaseSession, blog_service: BlogServiceDep, admin: AdminUser
):
    """
    Create a post.

    - **title**, **summary**, **content**: checked for promotional wording
    - **isPublished**: publish immediately
    """
    blog = await blog_service.create_blog(db, data, author_id=admin["id"])
    return SuccessResponse[BlogResponse](data=BlogResponse.model_validate(blog))


@router.put(
    "/{blog_id}",
    response_model=SuccessResponse[BlogResponse],
    dependencies=[Depends(log_action("UPDATE_BLOG"))],
)
async def update_blog(
    blog_id: int,
    data: BlogUpdate,
    db: DatabaseSession,
    blog_service: BlogServiceDep,
    admin: AdminUser,
):
    """Update a post."""
    blog = await blog_service.update_blog(db, blog_id, data)
    return SuccessResponse[BlogResponse](data=BlogResponse.model_validate(blog))


@router.patch(
    "/{blog_id}/toggle-publish",
    response_model=SuccessResponse[BlogResponse],
    dependencies=[Depends(log_action("TOGGLE_BLOG_PUBLISH"))],
)
async def toggle_publish(
    blog_id: int, db: DatabaseSession, blog_service: BlogServiceDep, admin: AdminUser
):
    """Publish or unpublish a post."""
    blog = await blog_service.toggle_publish(db, blog_id)
    return SuccessResponse[BlogResponse](data=BlogResponse.model_validate(blog))


@router.post("/{blog_id}/like")
async def like_blog(
    blog_id: int, db: DatabaseSession, blog_service: BlogServiceDep, user: CurrentUser
) -> dict:
    """Like a published post."""
    likes = await blog_service.like_blog(db, blog_id)
    return {"success": True, "likes": likes}


@router.delete(
    "/{blog_id}",
    response_model=MessageResponse,
    dependencies=[Depends(log_action("DELETE_BLOG"))],
)
async def delete_blog(
    blog_id: int, db: DatabaseSession, blog_service: BlogServiceDep, admin: AdminUser
):
    """Delete a post."""
    await blog_service.delete_blog(db, blog_id)
    return MessageResponse(message="Blog deleted successfully")
