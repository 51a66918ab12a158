"""Announcement model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)

from app.models.base import metadata

announcements = Table(
    "announcements",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("image_url", Text, nullable=True),
    Column("type", String(20), nullable=False, default="info"),
    Column("is_active", Boolean, nullable=False, default=True, index=True),
    Column("priority", Integer, nullable=False, default=1),
    Column("target_audience", String(20), nullable=False, default="all"),
    Column("expires_at", DateTime(timezone=True), nullable=True),
    Column("created_by", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint(
        "type IN ('info', 'warning', 'success', 'urgent')",
        name="announcements_type_check",
    ),
    CheckConstraint("priority BETWEEN 1 AND 5", name="announcements_priority_check"),
    CheckConstraint(
        "target_audience IN ('all', 'patients', 'staff')",
        name="announcements_audience_check",
    ),
)
