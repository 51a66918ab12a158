"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Table,
    Text,
    func,
)

from app.models.base import metadata

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", Text, nullable=False),
    # PII, stored as deterministic ciphertext
    Column("email", Text, nullable=False, unique=True, index=True),
    Column("phone", Text, nullable=False, default=""),
    Column("address", Text, nullable=False, default=""),
    Column("password_hash", Text, nullable=False),
    Column("role", String(20), nullable=False, default="patient"),
    Column("auth_provider", String(20), nullable=False, default="password"),
    # External identity bindings, NULL when unbound
    Column("supabase_id", Text, nullable=True, unique=True),
    Column("google_id", Text, nullable=True, unique=True),
    Column("avatar_url", Text, nullable=True),
    # KVKK consent
    Column("kvkk_consent", Boolean, nullable=False, default=False),
    Column("kvkk_accepted_at", DateTime(timezone=True), nullable=True),
    Column("kvkk_version", String(20), nullable=True),
    # Account state
    Column("is_active", Boolean, nullable=False, default=True),
    Column("last_login_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)
