"""Promo card model definition using SQLAlchemy Core."""

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

promo_cards = Table(
    "promo_cards",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("highlight", String(200), nullable=True),
    Column("image_url", Text, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True, index=True),
    Column("display_order", Integer, nullable=False, default=0),
    Column("doctor_id", Integer, ForeignKey("doctors.id", ondelete="SET NULL"), nullable=True),
    Column("target_type", String(20), nullable=False, default="none"),
    Column("target_id", String(100), nullable=True),
    Column("target_url", Text, nullable=True),
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
        "target_type IN ('blog', 'doctor', 'external', 'none')",
        name="promo_cards_target_type_check",
    ),
)
