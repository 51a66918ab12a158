"""Push notification schemas."""

from typing import Any

from pydantic import Field

from app.schemas.base import CamelModel

EXPO_TOKEN_PATTERN = r"^Expo(nent)?PushToken\[.+\]$"


class PushTokenRegister(CamelModel):
    """Expo push token registration."""

    token: str = Field(..., pattern=EXPO_TOKEN_PATTERN)
    platform: str = Field("unknown", pattern="^(ios|android|web|unknown)$")


class PushBroadcast(CamelModel):
    """Admin broadcast to every registered device."""

    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=1000)
    data: dict[str, Any] = Field(default_factory=dict)


class PushBroadcastResult(CamelModel):
    """Delivery summary for a broadcast."""

    success: bool = True
    total: int
    sent: int
    failed: int
    skipped: int
