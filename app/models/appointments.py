"""Appointment model definition using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    func,
)

from app.models.base import metadata

appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "patient_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "doctor_id",
        Integer,
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("patient_name", String(200), nullable=False),
    # PII, stored as deterministic ciphertext
    Column("patient_phone", Text, nullable=False, default=""),
    Column("patient_email", Text, nullable=False, default=""),
    Column("appointment_date", Date, nullable=False),
    Column("appointment_time", String(5), nullable=False),
    Column("duration", Integer, nullable=False, default=30),
    Column("status", String(20), nullable=False, default="scheduled"),
    Column("notes", Text, nullable=True),
    Column("treatment_type", String(150), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint(
        "status IN ('scheduled', 'confirmed', 'completed', 'cancelled', 'no-show')",
        name="appointments_status_check",
    ),
    Index("idx_appointments_doctor_slot", "doctor_id", "appointment_date", "appointment_time"),
)
