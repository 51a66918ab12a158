"""Bookmark service for business logic."""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestException, NotFoundException
from app.models.blogs import blogs
from app.models.bookmarks import bookmarks


class BookmarkService:
    """Service for users' saved blog posts."""

    async def list_bookmarks(self, db: AsyncSession, user_id: int) -> list[dict]:
        """Bookmarked posts, most recently saved first."""
        result = await db.execute(
            select(
                bookmarks.c.id.label("bookmark_id"),
                bookmarks.c.created_at.label("bookmarked_at"),
                blogs,
            )
            .join(blogs, bookmarks.c.blog_id == blogs.c.id)
            .where(bookmarks.c.user_id == user_id)
            .order_by(bookmarks.c.created_at.desc(), bookmarks.c.id.desc())
        )

        items = []
        for row in result.mappings().all():
            blog = dict(row)
            items.append(
                {
                    "id": blog.pop("bookmark_id"),
                    "blog_id": blog["id"],
                    "created_at": blog.pop("bookmarked_at"),
                    "blog": blog,
                }
            )
        return items

    async def add_bookmark(self, db: AsyncSession, user_id: int, blog_id: int) -> None:
        """
        Bookmark a published post.

        Raises:
            NotFoundException: Post missing or unpublished
            BadRequestException: Already bookmarked
        """
        blog = (
            await db.execute(
                select(blogs.c.id).where(blogs.c.id == blog_id, blogs.c.is_published.is_(True))
            )
        ).first()
        if not blog:
            raise NotFoundException("Blog not found")

        try:
            await db.execute(bookmarks.insert().values(user_id=user_id, blog_id=blog_id))
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise BadRequestException("Blog already bookmarked") from e

    async def remove_bookmark(self, db: AsyncSession, user_id: int, blog_id: int) -> None:
        """Remove a bookmark."""
        result = await db.execute(
            delete(bookmarks).where(bookmarks.c.user_id == user_id, bookmarks.c.blog_id == blog_id)
        )
        await db.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Bookmark not found")

    async def is_bookmarked(self, db: AsyncSession, user_id: int, blog_id: int) -> bool:
        """Whether the user has bookmarked the post."""
        result = await db.execute(
            select(bookmarks.c.id).where(
                bookmarks.c.user_id == user_id, bookmarks.c.blog_id == blog_id
            )
        )
        return result.first() is not None
