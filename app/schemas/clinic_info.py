"""Clinic info schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class ClinicInfoUpsert(CamelModel):
    """Clinic contact and about details."""

    name: str = Field(..., min_length=1, max_length=200)
    about: str | None = None
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    address: str | None = None
    map_url: str | None = None
    working_hours: dict[str, str] = Field(default_factory=dict)
    social_links: dict[str, str] = Field(default_factory=dict)


class ClinicInfoResponse(ClinicInfoUpsert):
    """Clinic info response schema."""

    id: int
    updated_at: datetime | None = None


class WorkingHoursUpdate(CamelModel):
    """Replace the opening hours, e.g. ``{"weekdays": "09:00-19:00"}``."""

    working_hours: dict[str, str]


class SocialLinksUpdate(CamelModel):
    """Replace the social media links, keyed by network."""

    social_links: dict[str, str]


class ClinicContact(CamelModel):
    """Contact card for the mobile app. Falls back to placeholders until configured."""

    name: str = "Dental Clinic"
    address: str = "Sample Address"
    phone: str = "+90 555 000 0000"
    email: str = "info@dentalclinic.com"
    map_url: str | None = None
