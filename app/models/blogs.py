"""Blog post model definition using SQLAlchemy Core."""

from sqlalchemy import (
    JSON,
    Boolean,
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

blogs = Table(
    "blogs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("summary", String(500), nullable=False),
    Column("content", Text, nullable=False),
    Column("image_url", Text, nullable=True),
    Column("author_name", String(150), nullable=False),
    Column("author_id", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("category", String(100), nullable=False, default="General", index=True),
    Column("tags", JSON, nullable=False, default=list),
    Column("is_published", Boolean, nullable=False, default=False, index=True),
    Column("published_at", DateTime(timezone=True), nullable=True),
    Column("read_time", Integer, nullable=False, default=1),
    Column("views", Integer, nullable=False, default=0),
    Column("likes", Integer, nullable=False, default=0),
    Column("is_featured", Boolean, nullable=False, default=False),
    Column("featured_order", Integer, nullable=False, default=0),
    Column("slug", String(250), nullable=False, unique=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)
