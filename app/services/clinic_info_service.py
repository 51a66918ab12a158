"""Clinic info service for business logic."""

from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.clinic_info import clinic_info
from app.schemas.clinic_info import ClinicInfoUpsert


class ClinicInfoService:
    """Service for the singleton clinic info record."""

    async def get_info(self, db: AsyncSession) -> dict:
        """Get clinic info, or raise NotFoundException when not configured."""
        result = await db.execute(select(clinic_info).order_by(clinic_info.c.id).limit(1))
        info = result.mappings().first()
        if not info:
            raise NotFoundException("Clinic info not configured")
        return dict(info)

    async def upsert_info(self, db: AsyncSession, data: ClinicInfoUpsert) -> dict:
        """Create the record or replace its contents."""
        existing = (await db.execute(select(clinic_info.c.id).limit(1))).first()

        if existing is None:
            query = clinic_info.insert().values(**data.model_dump()).returning(clinic_info)
        else:
            query = (
                update(clinic_info)
                .where(clinic_info.c.id == existing.id)
                .values(**data.model_dump(), updated_at=datetime.now(UTC))
                .returning(clinic_info)
            )

        result = await db.execute(query)
        info = dict(result.mappings().one())
        await db.commit()
        return info

    async def get_contact(self, db: AsyncSession) -> dict:
        """Contact fields of the record; unset fields are left out."""
        result = await db.execute(
            select(
                clinic_info.c.name,
                clinic_info.c.address,
                clinic_info.c.phone,
                clinic_info.c.email,
                clinic_info.c.map_url,
            )
            .order_by(clinic_info.c.id)
            .limit(1)
        )
        info = result.mappings().first()
        if not info:
            return {}
        return {key: value for key, value in info.items() if value}

    async def update_working_hours(self, db: AsyncSession, working_hours: dict[str, str]) -> dict:
        """Replace the opening hours of the configured record."""
        return await self._update(db, {"working_hours": working_hours})

    async def update_social_links(self, db: AsyncSession, social_links: dict[str, str]) -> dict:
        """Replace the social links of the configured record."""
        return await self._update(db, {"social_links": social_links})

    async def _update(self, db: AsyncSession, values: dict) -> dict:
        info = await self.get_info(db)
        result = await db.execute(
            update(clinic_info)
            .where(clinic_info.c.id == info["id"])
            .values(**values, updated_at=datetime.now(UTC))
            .returning(clinic_info)
        )
        updated = dict(result.mappings().one())
        await db.commit()
        return updated
