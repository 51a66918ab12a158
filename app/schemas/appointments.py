"""Appointment schemas for request/response validation."""

from datetime import date, datetime
from typing import Literal

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel

AppointmentStatus = Literal["scheduled", "confirmed", "completed", "cancelled", "no-show"]


class AppointmentCreate(CamelModel):
    """Schema for booking an appointment."""

    doctor_id: int
    patient_name: str = Field(..., min_length=1, max_length=200)
    patient_phone: str = Field(..., min_length=1, max_length=30)
    patient_email: EmailStr | None = None
    appointment_date: date
    appointment_time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    duration: int = Field(30, ge=5, le=240)
    notes: str | None = Field(None, max_length=1000)
    treatment_type: str | None = Field(None, max_length=150)


class AppointmentStatusUpdate(CamelModel):
    """Admin status change."""

    status: AppointmentStatus
    notes: str | None = Field(None, max_length=1000)


class AppointmentResponse(CamelModel):
    """Appointment with decrypted patient contact details."""

    id: int
    patient_id: int
    doctor_id: int
    doctor_name: str | None = None
    patient_name: str
    patient_phone: str = ""
    patient_email: str = ""
    appointment_date: date
    appointment_time: str
    duration: int
    status: AppointmentStatus
    notes: str | None = None
    treatment_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
