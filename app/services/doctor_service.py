"""Doctor service for business logic."""

from datetime import UTC, datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.core.redis_client import DOCTOR_LIST_PATTERN, CacheManager, doctor_key, doctor_list_key
from app.models.doctors import doctors
from app.schemas.doctors import DoctorCreate, DoctorUpdate


class DoctorService:
    """Service for doctor operations."""

    # Cache TTL in seconds
    DOCTOR_CACHE_TTL = 900  # 15 minutes for individual doctors
    DOCTOR_LIST_CACHE_TTL = 300  # 5 minutes for lists

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    def _invalidate(self, doctor_id: int | None = None) -> None:
        if not self.cache:
            return
        if doctor_id is not None:
            self.cache.delete(doctor_key(doctor_id))
        self.cache.delete_pattern(DOCTOR_LIST_PATTERN)

    async def create_doctor(self, db: AsyncSession, doctor_data: DoctorCreate) -> dict:
        """Create a new doctor profile."""
        query = doctors.insert().values(**doctor_data.model_dump()).returning(doctors)

        result = await db.execute(query)
        doctor = result.mappings().first()

        if not doctor:
            raise ValueError("Failed to create doctor")

        await db.commit()
        self._invalidate()

        return dict(doctor)

    async def get_doctor_by_id(self, db: AsyncSession, doctor_id: int) -> dict | None:
        """Get doctor by ID with caching."""
        # Try cache first
        if self.cache:
            cached = self.cache.get_json(doctor_key(doctor_id))
            if cached:
                return cached

        result = await db.execute(select(doctors).where(doctors.c.id == doctor_id))
        doctor = result.mappings().first()

        if not doctor:
            return None

        doctor_dict = dict(doctor)

        if self.cache:
            self.cache.set_json(
                doctor_key(doctor_id), doctor_dict, ttl=self.DOCTOR_CACHE_TTL
            )

        return doctor_dict

    async def get_doctors(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 20,
        specialty: str | None = None,
        is_active: bool | None = True,
    ) -> tuple[list[dict], int]:
        """
        Get a page of doctors.

        Public pages (active doctors only) are cached; admin pages are not.

        Returns:
            Tuple of (doctors, total matching)
        """
        cacheable = self.cache is not None and is_active is True
        if cacheable:
            cached = self.cache.get_json(doctor_list_key(specialty, page, limit))  # type: ignore[union-attr]
            if cached:
                return cached["items"], cached["total"]

        conditions: list = []
        if is_active is not None:
            conditions.append(doctors.c.is_active == is_active)
        if specialty:
            conditions.append(doctors.c.specialty.ilike(f"%{specialty}%"))

        total = (
            await db.execute(select(func.count()).select_from(doctors).where(*conditions))
        ).scalar_one()

        query = (
            select(doctors)
            .where(*conditions)
            .order_by(doctors.c.rating.desc(), doctors.c.name)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await db.execute(query)
        items = [dict(d) for d in result.mappings().all()]

        if cacheable:
            self.cache.set_json(  # type: ignore[union-attr]
                doctor_list_key(specialty, page, limit),
                {"items": items, "total": total},
                ttl=self.DOCTOR_LIST_CACHE_TTL,
            )

        return items, total

    async def update_doctor(
        self, db: AsyncSession, doctor_id: int, doctor_data: DoctorUpdate
    ) -> dict:
        """Update a doctor. Only fields sent by the client change."""
        update_data = doctor_data.model_dump(exclude_unset=True)
        if "available_hours" in update_data and update_data["available_hours"] is None:
            update_data["available_hours"] = {}
        update_data["updated_at"] = datetime.now(UTC)

        return await self._update(db, doctor_id, update_data)

    async def toggle_status(self, db: AsyncSession, doctor_id: int) -> dict:
        """Flip a doctor's active flag."""
        doctor = await self.get_doctor_by_id(db, doctor_id)
        if not doctor:
            raise NotFoundException("Doctor not found")
        return await self._update(
            db,
            doctor_id,
            {"is_active": not doctor["is_active"], "updated_at": datetime.now(UTC)},
        )

    async def delete_doctor(self, db: AsyncSession, doctor_id: int) -> None:
        """Delete a doctor."""
        result = await db.execute(delete(doctors).where(doctors.c.id == doctor_id))
        await db.commit()

        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Doctor not found")

        self._invalidate(doctor_id)

    async def _update(self, db: AsyncSession, doctor_id: int, values: dict) -> dict:
        query = update(doctors).where(doctors.c.id == doctor_id).values(**values).returning(doctors)
        result = await db.execute(query)
        doctor = result.mappings().first()
        await db.commit()

        if not doctor:
            raise NotFoundException("Doctor not found")

        self._invalidate(doctor_id)
        return dict(doctor)
