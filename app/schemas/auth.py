"""Authentication schemas."""

from pydantic import AliasChoices, Field

from app.schemas.base import CamelModel
from app.schemas.users import UserProfile


class RegisterRequest(CamelModel):
    """
    Local account registration.

    Required fields are checked by the auth service so that a missing
    field and a missing consent produce the same error shape.
    """

    full_name: str | None = Field(
        None, validation_alias=AliasChoices("fullName", "name", "full_name")
    )
    email: str | None = None
    mobile_number: str | None = Field(
        None, validation_alias=AliasChoices("mobileNumber", "phone", "mobile_number")
    )
    address: str | None = None
    password: str | None = None
    kvkk_consent: bool | None = Field(
        None, validation_alias=AliasChoices("kvkkConsent", "kvkkAccepted", "kvkk_consent")
    )


class LoginRequest(CamelModel):
    """Local password login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(CamelModel):
    """Password change for the signed-in user."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class AuthResponse(CamelModel):
    """Signed credential plus the profile it belongs to."""

    success: bool = True
    token: str
    token_type: str = "bearer"
    user: UserProfile


class ProfileResponse(CamelModel):
    """Profile envelope."""

    success: bool = True
    user: UserProfile
