"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    String,
    Table,
    Text,
    func,
)

from app.models.base import metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("surname", String(100), nullable=False),
    Column("title", String(50), nullable=False, default="Dt."),
    Column("specialty", String(150), nullable=False, index=True),
    Column("university", String(200), nullable=True),
    Column("experience", String(100), nullable=True),
    Column("phone", String(30), nullable=True),
    Column("email", String(255), nullable=True),
    Column("image_url", Text, nullable=True),
    Column("bio", Text, nullable=True),
    Column("description", Text, nullable=True),
    Column("rating", Float, nullable=False, default=5.0),
    Column("patients", String(50), nullable=True),
    Column("languages", JSON, nullable=False, default=list),
    # {"monday": {"start": "09:00", "end": "18:00"}, ...}
    Column("available_hours", JSON, nullable=False, default=dict),
    Column("is_active", Boolean, nullable=False, default=True, index=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)
