"""User schemas for request/response validation."""

from datetime import datetime

from pydantic import AliasChoices, Field, computed_field

from app.schemas.base import CamelModel


class UserProfile(CamelModel):
    """
    Decrypted user view.

    Mobile clients read ``fullName``/``mobileNumber``/``kvkkConsent``; the
    admin panel reads ``name``/``phone``/``kvkkAccepted``. Both are emitted.
    """

    id: int
    full_name: str
    email: str
    mobile_number: str = ""
    address: str = ""
    role: str = "patient"
    auth_provider: str = "password"
    avatar_url: str | None = None
    kvkk_consent: bool = False
    kvkk_accepted_at: datetime | None = None
    kvkk_version: str | None = None
    is_active: bool = True
    last_login_at: datetime | None = None
    created_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def name(self) -> str:
        return self.full_name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def phone(self) -> str:
        return self.mobile_number

    @computed_field(alias="kvkkAccepted")  # type: ignore[prop-decorator]
    @property
    def kvkk_accepted(self) -> bool:
        return self.kvkk_consent


class UserUpdate(CamelModel):
    """Profile fields a user may change about themselves."""

    full_name: str | None = Field(
        None,
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("fullName", "name", "full_name"),
    )
    mobile_number: str | None = Field(
        None,
        max_length=30,
        validation_alias=AliasChoices("mobileNumber", "phone", "mobile_number"),
    )
    address: str | None = Field(None, max_length=500)


class UserStatusUpdate(CamelModel):
    """Admin toggle of account activity."""

    is_active: bool | None = None


class UserRoleUpdate(CamelModel):
    """Admin role assignment."""

    role: str = Field(..., pattern="^(patient|admin)$")
