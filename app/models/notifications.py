"""In-app notification model definition using SQLAlchemy Core."""

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

notifications = Table(
    "notifications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("message", Text, nullable=False),
    Column("type", String(20), nullable=False, default="other"),
    Column("blog_id", Integer, ForeignKey("blogs.id", ondelete="SET NULL"), nullable=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created_by", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("is_read", Boolean, nullable=False, default=False),
    Column("target_audience", String(20), nullable=False, default="all"),
    Column("scheduled_for", DateTime(timezone=True), nullable=True),
    Column("expires_at", DateTime(timezone=True), nullable=True),
    Column("is_active", Boolean, nullable=False, default=True, index=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint(
        "type IN ('announcement', 'blog', 'other')",
        name="notifications_type_check",
    ),
    CheckConstraint(
        "target_audience IN ('all', 'patients', 'staff')",
        name="notifications_audience_check",
    ),
)
