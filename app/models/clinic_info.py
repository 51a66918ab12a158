"""Clinic info model definition using SQLAlchemy Core.

The table holds at most one row.
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    String,
    Table,
    Text,
    func,
)

from app.models.base import metadata

clinic_info = Table(
    "clinic_info",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("about", Text, nullable=True),
    Column("phone", String(30), nullable=True),
    Column("email", String(255), nullable=True),
    Column("address", Text, nullable=True),
    Column("map_url", Text, nullable=True),
    Column("working_hours", JSON, nullable=False, default=dict),
    Column("social_links", JSON, nullable=False, default=dict),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)
