"""Doctor schemas for request/response validation."""

from datetime import datetime

from pydantic import EmailStr, Field, computed_field

from app.schemas.base import CamelModel


class WorkingHours(CamelModel):
    """Start and end of a working day, "HH:MM"."""

    start: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    end: str = Field(..., pattern=r"^\d{2}:\d{2}$")


class DoctorBase(CamelModel):
    """Base schema for doctor."""

    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    title: str = Field("Dt.", max_length=50)
    specialty: str = Field(..., min_length=1, max_length=150)
    university: str | None = Field(None, max_length=200)
    experience: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    image_url: str | None = None
    bio: str | None = None
    description: str | None = None
    rating: float = Field(5.0, ge=0, le=5)
    patients: str | None = None
    languages: list[str] = Field(default_factory=list)
    available_hours: dict[str, WorkingHours] = Field(default_factory=dict)


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""

    is_active: bool = True


class DoctorUpdate(CamelModel):
    """Schema for updating a doctor. Only sent fields change."""

    name: str | None = Field(None, min_length=1, max_length=100)
    surname: str | None = Field(None, min_length=1, max_length=100)
    title: str | None = Field(None, max_length=50)
    specialty: str | None = Field(None, min_length=1, max_length=150)
    university: str | None = None
    experience: str | None = None
    phone: str | None = None
    email: EmailStr | None = None
    image_url: str | None = None
    bio: str | None = None
    description: str | None = None
    rating: float | None = Field(None, ge=0, le=5)
    patients: str | None = None
    languages: list[str] | None = None
    available_hours: dict[str, WorkingHours] | None = None
    is_active: bool | None = None


class DoctorResponse(DoctorBase):
    """Doctor response schema."""

    id: int
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.title, self.name, self.surname) if part)
