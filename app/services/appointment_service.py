"""Appointment service for business logic."""

from datetime import UTC, date, datetime

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.crypto import FieldCipher
from app.core.exceptions import BadRequestException, ForbiddenException, NotFoundException
from app.models.appointments import appointments
from app.models.doctors import doctors
from app.schemas.appointments import AppointmentCreate

logger = structlog.get_logger(__name__)

BLOCKING_STATUSES = ("scheduled", "confirmed")

_doctor_name = (doctors.c.title + " " + doctors.c.name + " " + doctors.c.surname).label(
    "doctor_name"
)


class AppointmentService:
    """Service for managing appointments. Patient contact details are encrypted at rest."""

    def __init__(self, cipher: FieldCipher):
        """Initialize service with the field cipher."""
        self.cipher = cipher

    def _decrypt(self, row: dict) -> dict:
        appointment = dict(row)
        appointment["patient_phone"] = self.cipher.decrypt(appointment["patient_phone"])
        appointment["patient_email"] = self.cipher.decrypt(appointment["patient_email"])
        return appointment

    def _select(self):
        return select(appointments, _doctor_name).outerjoin(
            doctors, appointments.c.doctor_id == doctors.c.id
        )

    async def _fetch(self, db: AsyncSession, appointment_id: int) -> dict:
        result = await db.execute(self._select().where(appointments.c.id == appointment_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Appointment not found")
        return dict(row)

    async def create_appointment(
        self, db: AsyncSession, patient_id: int, data: AppointmentCreate
    ) -> dict:
        """
        Book an appointment.

        Args:
            db: Database session
            patient_id: Local user booking the appointment
            data: Appointment details

        Returns:
            Created appointment with decrypted contact details

        Raises:
            BadRequestException: Doctor missing or inactive, or slot already taken
        """
        doctor = (
            await db.execute(select(doctors.c.is_active).where(doctors.c.id == data.doctor_id))
        ).first()
        if not doctor or not doctor.is_active:
            raise BadRequestException("Doctor not available")

        conflict = (
            await db.execute(
                select(appointments.c.id).where(
                    appointments.c.doctor_id == data.doctor_id,
                    appointments.c.appointment_date == data.appointment_date,
                    appointments.c.appointment_time == data.appointment_time,
                    appointments.c.status.in_(BLOCKING_STATUSES),
                )
            )
        ).first()
        if conflict:
            raise BadRequestException("Time slot not available")

        values = data.model_dump()
        values.update(
            patient_id=patient_id,
            patient_phone=self.cipher.encrypt(data.patient_phone),
            patient_email=self.cipher.encrypt(data.patient_email or ""),
            status="scheduled",
        )
        result = await db.execute(appointments.insert().values(**values).returning(appointments.c.id))
        appointment_id = result.scalar_one()
        await db.commit()

        logger.info("appointment_booked", appointment_id=appointment_id, doctor_id=data.doctor_id)
        return self._decrypt(await self._fetch(db, appointment_id))

    async def get_appointment(
        self, db: AsyncSession, appointment_id: int, user_id: int, is_admin: bool
    ) -> dict:
        """Get one appointment. Only its patient or an admin may read it."""
        appointment = await self._fetch(db, appointment_id)
        if not is_admin and appointment["patient_id"] != user_id:
            raise ForbiddenException("Access denied")
        return self._decrypt(appointment)

    async def list_appointments(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
        patient_id: int | None = None,
        doctor_id: int | None = None,
        status: str | None = None,
        on_date: date | None = None,
    ) -> tuple[list[dict], int]:
        """List appointments, most recent date first."""
        conditions: list = []
        if patient_id is not None:
            conditions.append(appointments.c.patient_id == patient_id)
        if doctor_id is not None:
            conditions.append(appointments.c.doctor_id == doctor_id)
        if status:
            conditions.append(appointments.c.status == status)
        if on_date:
            conditions.append(appointments.c.appointment_date == on_date)

        total = (
            await db.execute(select(func.count()).select_from(appointments).where(*conditions))
        ).scalar_one()
        result = await db.execute(
            self._select()
            .where(*conditions)
            .order_by(
                appointments.c.appointment_date.desc(),
                appointments.c.appointment_time,
                appointments.c.id,
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [self._decrypt(row) for row in result.mappings().all()], total

    async def update_status(
        self, db: AsyncSession, appointment_id: int, status: str, notes: str | None = None
    ) -> dict:
        """Set an appointment's status."""
        values: dict = {"status": status, "updated_at": datetime.now(UTC)}
        if notes:
            values["notes"] = notes
        return await self._update(db, appointment_id, values)

    async def cancel_appointment(
        self, db: AsyncSession, appointment_id: int, user_id: int, is_admin: bool
    ) -> dict:
        """Cancel an appointment the caller owns. Completed appointments stay."""
        appointment = await self._fetch(db, appointment_id)
        if not is_admin and appointment["patient_id"] != user_id:
            raise ForbiddenException("Access denied")
        if appointment["status"] == "completed":
            raise BadRequestException("Cannot cancel completed appointment")

        return await self._update(
            db, appointment_id, {"status": "cancelled", "updated_at": datetime.now(UTC)}
        )

    async def _update(self, db: AsyncSession, appointment_id: int, values: dict) -> dict:
        result = await db.execute(
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(**values)
            .returning(appointments.c.id)
        )
        updated = result.scalar_one_or_none()
        await db.commit()
        if updated is None:
            raise NotFoundException("Appointment not found")
        logger.info("appointment_updated", appointment_id=appointment_id, status=values.get("status"))
        return self._decrypt(await self._fetch(db, appointment_id))
