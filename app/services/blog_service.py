"""Blog service for business logic."""

import math
import re
from datetime import UTC, datetime

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.blogs import blogs
from app.schemas.blogs import BlogCreate, BlogUpdate
from app.services.content_service import ensure_no_promotional_content

logger = structlog.get_logger(__name__)

WORDS_PER_MINUTE = 200

_TURKISH_ASCII = str.maketrans("çğıöşüÇĞİÖŞÜ", "cgiosuCGIOSU")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def calculate_read_time(content: str) -> int:
    """Minutes to read ``content`` at 200 words per minute, at least 1."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def slugify(title: str) -> str:
    """URL-friendly form of a title."""
    slug = _NON_SLUG_RE.sub("-", title.translate(_TURKISH_ASCII).lower()).strip("-")
    return slug or "post"


class BlogService:
    """Service for blog post operations."""

    async def _unique_slug(
        self, db: AsyncSession, title: str, exclude_id: int | None = None
    ) -> str:
        base = slugify(title)
        slug = base
        suffix = 2
        while True:
            query = select(blogs.c.id).where(blogs.c.slug == slug)
            if exclude_id is not None:
                query = query.where(blogs.c.id != exclude_id)
            if (await db.execute(query)).first() is None:
                return slug
            slug = f"{base}-{suffix}"
            suffix += 1

    async def create_blog(self, db: AsyncSession, data: BlogCreate, author_id: int | None) -> dict:
        """Create a blog post after the promotional content check."""
        ensure_no_promotional_content(data.title, data.summary, data.content, *data.tags)

        values = data.model_dump()
        values.update(
            author_id=author_id,
            slug=await self._unique_slug(db, data.title),
            read_time=calculate_read_time(data.content),
            published_at=datetime.now(UTC) if data.is_published else None,
        )

        result = await db.execute(blogs.insert().values(**values).returning(blogs))
        blog = dict(result.mappings().one())
        await db.commit()

        logger.info("blog_created", blog_id=blog["id"], published=blog["is_published"])
        return blog

    async def get_blog(self, db: AsyncSession, blog_id: int) -> dict | None:
        """Get blog post by ID."""
        result = await db.execute(select(blogs).where(blogs.c.id == blog_id))
        blog = result.mappings().first()
        return dict(blog) if blog else None

    async def view_blog(self, db: AsyncSession, blog_id: int, include_unpublished: bool) -> dict:
        """
        Read a post as a visitor.

        Unpublished posts are hidden unless ``include_unpublished``. Published
        posts count a view.
        """
        blog = await self.get_blog(db, blog_id)
        if not blog or (not blog["is_published"] and not include_unpublished):
            raise NotFoundException("Blog not found")

        if blog["is_published"]:
            result = await db.execute(
                update(blogs)
                .where(blogs.c.id == blog_id)
                .values(views=blogs.c.views + 1)
                .returning(blogs)
            )
            blog = dict(result.mappings().one())
            await db.commit()

        return blog

    async def list_blogs(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
        published_only: bool = True,
        category: str | None = None,
        author: str | None = None,
        is_published: bool | None = None,
    ) -> tuple[list[dict], int]:
        """List posts, newest first. Featured posts lead the public list."""
        conditions: list = []
        if published_only:
            conditions.append(blogs.c.is_published.is_(True))
        elif is_published is not None:
            conditions.append(blogs.c.is_published == is_published)
        if category:
            conditions.append(blogs.c.category == category)
        if author:
            conditions.append(blogs.c.author_name.ilike(f"%{author}%"))

        total = (
            await db.execute(select(func.count()).select_from(blogs).where(*conditions))
        ).scalar_one()

        order = [blogs.c.created_at.desc(), blogs.c.id.desc()]
        if published_only:
            order = [blogs.c.is_featured.desc(), blogs.c.featured_order, *order]

        result = await db.execute(
            select(blogs)
            .where(*conditions)
            .order_by(*order)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [dict(b) for b in result.mappings().all()], total

    async def update_blog(self, db: AsyncSession, blog_id: int, data: BlogUpdate) -> dict:
        """Update a post after the promotional content check."""
        blog = await self.get_blog(db, blog_id)
        if not blog:
            raise NotFoundException("Blog not found")

        update_data = data.model_dump(exclude_unset=True)
        ensure_no_promotional_content(
            update_data.get("title"),
            update_data.get("summary"),
            update_data.get("content"),
            *(update_data.get("tags") or []),
        )

        if update_data.get("title") and update_data["title"] != blog["title"]:
            update_data["slug"] = await self._unique_slug(db, update_data["title"], blog_id)
        if update_data.get("content"):
            update_data["read_time"] = calculate_read_time(update_data["content"])
        if update_data.get("is_published") and not blog["published_at"]:
            update_data["published_at"] = datetime.now(UTC)
        update_data["updated_at"] = datetime.now(UTC)

        return await self._update(db, blog_id, update_data)

    async def toggle_publish(self, db: AsyncSession, blog_id: int) -> dict:
        """Flip publication. The first publish stamps ``published_at``."""
        blog = await self.get_blog(db, blog_id)
        if not blog:
            raise NotFoundException("Blog not found")

        values: dict = {"is_published": not blog["is_published"], "updated_at": datetime.now(UTC)}
        if values["is_published"] and not blog["published_at"]:
            values["published_at"] = datetime.now(UTC)
        return await self._update(db, blog_id, values)

    async def like_blog(self, db: AsyncSession, blog_id: int) -> int:
        """Add a like to a published post and return the new count."""
        result = await db.execute(
            update(blogs)
            .where(blogs.c.id == blog_id, blogs.c.is_published.is_(True))
            .values(likes=blogs.c.likes + 1)
            .returning(blogs.c.likes)
        )
        likes = result.scalar_one_or_none()
        await db.commit()

        if likes is None:
            raise NotFoundException("Blog not found")
        return likes

    async def delete_blog(self, db: AsyncSession, blog_id: int) -> None:
        """Delete a post."""
        result = await db.execute(delete(blogs).where(blogs.c.id == blog_id))
        await db.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Blog not found")

    async def _update(self, db: AsyncSession, blog_id: int, values: dict) -> dict:
        result = await db.execute(
            update(blogs).where(blogs.c.id == blog_id).values(**values).returning(blogs)
        )
        blog = result.mappings().first()
        await db.commit()
        if not blog:
            raise NotFoundException("Blog not found")
        return dict(blog)
