"""Create blog, bookmark, announcement, promo card, legal and clinic info tables

Revision ID: 003
Revises: 002
Create Date: 2026-01-05 10:30:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def _user_ref(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"))


def upgrade() -> None:
    """Create content tables."""
    op.create_table(
        "blogs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("summary", sa.String(500), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("author_name", sa.String(150), nullable=False),
        _user_ref("author_id"),
        sa.Column(
            "category", sa.String(100), nullable=False, server_default=sa.text("'General'")
        ),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("read_time", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("views", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("likes", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("featured_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("slug", sa.String(250), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("slug", name="uq_blogs_slug"),
    )
    op.create_index("ix_blogs_category", "blogs", ["category"])
    op.create_index("ix_blogs_is_published", "blogs", ["is_published"])

    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "blog_id",
            sa.Integer(),
            sa.ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("user_id", "blog_id", name="uq_bookmarks_user_blog"),
    )
    op.create_index("ix_bookmarks_user_id", "bookmarks", ["user_id"])

    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("type", sa.String(20), nullable=False, server_default=sa.text("'info'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("priority", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column(
            "target_audience", sa.String(20), nullable=False, server_default=sa.text("'all'")
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _user_ref("created_by"),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('info', 'warning', 'success', 'urgent')",
            name="announcements_type_check",
        ),
        sa.CheckConstraint("priority BETWEEN 1 AND 5", name="announcements_priority_check"),
        sa.CheckConstraint(
            "target_audience IN ('all', 'patients', 'staff')",
            name="announcements_audience_check",
        ),
    )
    op.create_index("ix_announcements_is_active", "announcements", ["is_active"])

    op.create_table(
        "promo_cards",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("highlight", sa.String(200), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "doctor_id", sa.Integer(), sa.ForeignKey("doctors.id", ondelete="SET NULL")
        ),
        sa.Column(
            "target_type", sa.String(20), nullable=False, server_default=sa.text("'none'")
        ),
        sa.Column("target_id", sa.String(100), nullable=True),
        sa.Column("target_url", sa.Text(), nullable=True),
        _user_ref("created_by"),
        *_timestamps(),
        sa.CheckConstraint(
            "target_type IN ('blog', 'doctor', 'external', 'none')",
            name="promo_cards_target_type_check",
        ),
    )
    op.create_index("ix_promo_cards_is_active", "promo_cards", ["is_active"])

    op.create_table(
        "legal_documents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("key", sa.String(20), nullable=False),
        sa.Column("version", sa.String(20), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("language", sa.String(5), nullable=False, server_default=sa.text("'tr'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _user_ref("created_by"),
        *_timestamps(),
        sa.CheckConstraint(
            "key IN ('kvkk', 'privacy', 'terms')", name="legal_documents_key_check"
        ),
        sa.CheckConstraint("language IN ('tr', 'en')", name="legal_documents_language_check"),
    )
    op.create_index(
        "idx_legal_documents_lookup", "legal_documents", ["key", "language", "is_active"]
    )

    op.create_table(
        "clinic_info",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("about", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("map_url", sa.Text(), nullable=True),
        sa.Column("working_hours", sa.JSON(), nullable=False),
        sa.Column("social_links", sa.JSON(), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop content tables."""
    op.drop_table("clinic_info")
    op.drop_index("idx_legal_documents_lookup", table_name="legal_documents")
    op.drop_table("legal_documents")
    op.drop_index("ix_promo_cards_is_active", table_name="promo_cards")
    op.drop_table("promo_cards")
    op.drop_index("ix_announcements_is_active", table_name="announcements")
    op.drop_table("announcements")
    op.drop_index("ix_bookmarks_user_id", table_name="bookmarks")
    op.drop_table("bookmarks")
    op.drop_index("ix_blogs_is_published", table_name="blogs")
    op.drop_index("ix_blogs_category", table_name="blogs")
    op.drop_table("blogs")
