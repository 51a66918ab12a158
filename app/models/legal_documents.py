"""Legal document model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
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

legal_documents = Table(
    "legal_documents",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", String(20), nullable=False),
    Column("version", String(20), nullable=False),
    Column("title", String(200), nullable=False),
    Column("body", Text, nullable=False),
    Column("language", String(5), nullable=False, default="tr"),
    Column("is_active", Boolean, nullable=False, default=False),
    Column("published_at", DateTime(timezone=True), nullable=True),
    Column("created_by", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
    CheckConstraint("key IN ('kvkk', 'privacy', 'terms')", name="legal_documents_key_check"),
    CheckConstraint("language IN ('tr', 'en')", name="legal_documents_language_check"),
    Index("idx_legal_documents_lookup", "key", "language", "is_active"),
)
