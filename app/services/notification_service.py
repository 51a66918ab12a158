"""In-app notification service."""

from datetime import UTC, datetime

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.blogs import blogs
from app.models.notifications import notifications
from app.schemas.notifications import (
    BlogPublishedNotification,
    NotificationCreate,
    NotificationUpdate,
)
from app.services.content_service import ensure_no_promotional_content

BLOG_PUBLISHED_TITLE = "New Article Published"


def _with_blog():
    """Notifications joined with the title, image and slug of their article."""
    return select(
        notifications,
        blogs.c.title.label("blog_title"),
        blogs.c.image_url.label("blog_image_url"),
        blogs.c.slug.label("blog_slug"),
    ).select_from(notifications.outerjoin(blogs, notifications.c.blog_id == blogs.c.id))


def _to_dict(row) -> dict:
    notification = dict(row)
    title = notification.pop("blog_title")
    image_url = notification.pop("blog_image_url")
    slug = notification.pop("blog_slug")
    notification["blog"] = (
        {"id": notification["blog_id"], "title": title, "image_url": image_url, "slug": slug}
        if title is not None
        else None
    )
    return notification


class NotificationService:
    """Service for in-app notification operations."""

    async def list_active(
        self, db: AsyncSession, type_: str | None = None, limit: int = 20
    ) -> list[dict]:
        """
        The public feed: active notifications that are due and not expired,
        newest first.
        """
        now = datetime.now(UTC)
        conditions: list = [
            notifications.c.is_active.is_(True),
            or_(notifications.c.expires_at.is_(None), notifications.c.expires_at > now),
            or_(notifications.c.scheduled_for.is_(None), notifications.c.scheduled_for <= now),
        ]
        if type_:
            conditions.append(notifications.c.type == type_)

        result = await db.execute(
            _with_blog()
            .where(*conditions)
            .order_by(notifications.c.created_at.desc(), notifications.c.id.desc())
            .limit(limit)
        )
        return [_to_dict(row) for row in result.mappings().all()]

    async def list_all(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 20,
        type_: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[dict], int]:
        """Every notification for the admin panel."""
        conditions: list = []
        if type_:
            conditions.append(notifications.c.type == type_)
        if is_active is not None:
            conditions.append(notifications.c.is_active == is_active)

        total = (
            await db.execute(select(func.count()).select_from(notifications).where(*conditions))
        ).scalar_one()
        result = await db.execute(
            _with_blog()
            .where(*conditions)
            .order_by(notifications.c.created_at.desc(), notifications.c.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [_to_dict(row) for row in result.mappings().all()], total

    async def get_notification(self, db: AsyncSession, notification_id: int) -> dict:
        """Get notification by ID."""
        result = await db.execute(_with_blog().where(notifications.c.id == notification_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Notification not found")
        return _to_dict(row)

    async def create_notification(
        self, db: AsyncSession, data: NotificationCreate, created_by: int | None
    ) -> dict:
        """Create a notification after the promotional content check."""
        ensure_no_promotional_content(data.title, data.message)
        if data.blog_id is not None:
            await self._get_blog(db, data.blog_id)

        result = await db.execute(
            notifications.insert()
            .values(**data.model_dump(), created_by=created_by)
            .returning(notifications.c.id)
        )
        notification_id = result.scalar_one()
        await db.commit()
        return await self.get_notification(db, notification_id)

    async def create_blog_notification(
        self, db: AsyncSession, data: BlogPublishedNotification, created_by: int | None
    ) -> dict:
        """
        Tell readers about a newly published article.

        The message uses ``blog_title`` when given, otherwise the stored title.

        Raises:
            NotFoundException: The article does not exist
        """
        blog = await self._get_blog(db, data.blog_id)
        result = await db.execute(
            notifications.insert()
            .values(
                title=BLOG_PUBLISHED_TITLE,
                message=f"Check out our latest article: {data.blog_title or blog['title']}",
                type="blog",
                blog_id=data.blog_id,
                target_audience="all",
                created_by=created_by,
            )
            .returning(notifications.c.id)
        )
        notification_id = result.scalar_one()
        await db.commit()
        return await self.get_notification(db, notification_id)

    async def update_notification(
        self, db: AsyncSession, notification_id: int, data: NotificationUpdate
    ) -> dict:
        """Update a notification after the promotional content check."""
        update_data = data.model_dump(exclude_unset=True)
        ensure_no_promotional_content(update_data.get("title"), update_data.get("message"))
        if update_data.get("blog_id") is not None:
            await self._get_blog(db, update_data["blog_id"])
        update_data["updated_at"] = datetime.now(UTC)
        await self._update(db, notification_id, update_data)
        return await self.get_notification(db, notification_id)

    async def mark_read(self, db: AsyncSession, notification_id: int) -> None:
        """Mark a notification as read. The flag is shared by all readers."""
        await self._update(
            db, notification_id, {"is_read": True, "updated_at": datetime.now(UTC)}
        )

    async def delete_notification(self, db: AsyncSession, notification_id: int) -> None:
        """Delete a notification."""
        result = await db.execute(
            delete(notifications).where(notifications.c.id == notification_id)
        )
        await db.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Notification not found")

    async def _get_blog(self, db: AsyncSession, blog_id: int) -> dict:
        result = await db.execute(select(blogs.c.id, blogs.c.title).where(blogs.c.id == blog_id))
        blog = result.mappings().first()
        if not blog:
            raise NotFoundException("Blog not found")
        return dict(blog)

    async def _update(self, db: AsyncSession, notification_id: int, values: dict) -> None:
        result = await db.execute(
            update(notifications)
            .where(notifications.c.id == notification_id)
            .values(**values)
            .returning(notifications.c.id)
        )
        updated = result.scalar_one_or_none()
        await db.commit()
        if updated is None:
            raise NotFoundException("Notification not found")
