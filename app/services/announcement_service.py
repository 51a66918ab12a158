"""Announcement service for business logic."""

from datetime import UTC, datetime

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.announcements import announcements
from app.schemas.announcements import AnnouncementCreate, AnnouncementUpdate
from app.services.content_service import ensure_no_promotional_content


class AnnouncementService:
    """Service for announcement operations."""

    async def create_announcement(
        self, db: AsyncSession, data: AnnouncementCreate, created_by: int | None
    ) -> dict:
        """Create an announcement after the promotional content check."""
        ensure_no_promotional_content(data.title, data.description)

        result = await db.execute(
            announcements.insert()
            .values(**data.model_dump(), created_by=created_by)
            .returning(announcements)
        )
        announcement = dict(result.mappings().one())
        await db.commit()
        return announcement

    async def get_announcement(self, db: AsyncSession, announcement_id: int) -> dict:
        """Get announcement by ID."""
        result = await db.execute(
            select(announcements).where(announcements.c.id == announcement_id)
        )
        announcement = result.mappings().first()
        if not announcement:
            raise NotFoundException("Announcement not found")
        return dict(announcement)

    async def list_active(
        self,
        db: AsyncSession,
        type_: str | None = None,
        audience: str | None = None,
        limit: int = 20,
    ) -> list[dict]:
        """Active, unexpired announcements, highest priority and newest first."""
        conditions: list = [
            announcements.c.is_active.is_(True),
            or_(
                announcements.c.expires_at.is_(None),
                announcements.c.expires_at > datetime.now(UTC),
            ),
        ]
        if type_:
            conditions.append(announcements.c.type == type_)
        if audience:
            conditions.append(announcements.c.target_audience.in_([audience, "all"]))

        result = await db.execute(
            select(announcements)
            .where(*conditions)
            .order_by(
                announcements.c.priority.desc(),
                announcements.c.created_at.desc(),
                announcements.c.id.desc(),
            )
            .limit(limit)
        )
        return [dict(a) for a in result.mappings().all()]

    async def list_all(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 20,
        is_active: bool | None = None,
    ) -> tuple[list[dict], int]:
        """Every announcement for the admin panel."""
        conditions: list = []
        if is_active is not None:
            conditions.append(announcements.c.is_active == is_active)

        total = (
            await db.execute(select(func.count()).select_from(announcements).where(*conditions))
        ).scalar_one()
        result = await db.execute(
            select(announcements)
            .where(*conditions)
            .order_by(announcements.c.created_at.desc(), announcements.c.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [dict(a) for a in result.mappings().all()], total

    async def update_announcement(
        self, db: AsyncSession, announcement_id: int, data: AnnouncementUpdate
    ) -> dict:
        """Update an announcement after the promotional content check."""
        update_data = data.model_dump(exclude_unset=True)
        ensure_no_promotional_content(update_data.get("title"), update_data.get("description"))
        update_data["updated_at"] = datetime.now(UTC)
        return await self._update(db, announcement_id, update_data)

    async def toggle_status(self, db: AsyncSession, announcement_id: int) -> dict:
        """Flip the active flag."""
        announcement = await self.get_announcement(db, announcement_id)
        return await self._update(
            db,
            announcement_id,
            {"is_active": not announcement["is_active"], "updated_at": datetime.now(UTC)},
        )

    async def delete_announcement(self, db: AsyncSession, announcement_id: int) -> None:
        """Delete an announcement."""
        result = await db.execute(
            delete(announcements).where(announcements.c.id == announcement_id)
        )
        await db.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Announcement not found")

    async def _update(self, db: AsyncSession, announcement_id: int, values: dict) -> dict:
        result = await db.execute(
            update(announcements)
            .where(announcements.c.id == announcement_id)
            .values(**values)
            .returning(announcements)
        )
        announcement = result.mappings().first()
        await db.commit()
        if not announcement:
            raise NotFoundException("Announcement not found")
        return dict(announcement)
