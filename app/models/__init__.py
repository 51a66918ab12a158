"""Database models."""

from app.models.admin_logs import admin_logs
from app.models.announcements import announcements
from app.models.appointments import appointments
from app.models.base import metadata
from app.models.blogs import blogs
from app.models.bookmarks import bookmarks
from app.models.clinic_info import clinic_info
from app.models.doctors import doctors
from app.models.legal_documents import legal_documents
from app.models.notifications import notifications
from app.models.promo_cards import promo_cards
from app.models.push_tokens import push_tokens
from app.models.users import users

__all__ = [
    "admin_logs",
    "announcements",
    "appointments",
    "blogs",
    "bookmarks",
    "clinic_info",
    "doctors",
    "legal_documents",
    "metadata",
    "notifications",
    "promo_cards",
    "push_tokens",
    "users",
]
