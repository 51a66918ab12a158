"""Admin area schemas."""

from datetime import datetime

from app.schemas.base import CamelModel


class AdminLogResponse(CamelModel):
    """Audit log entry."""

    id: int
    admin_id: int | None = None
    action: str
    method: str
    endpoint: str
    ip: str | None = None
    user_agent: str | None = None
    timestamp: datetime | None = None


class AdminIdentity(CamelModel):
    """Who the signed-in admin is and why they are an admin."""

    success: bool = True
    id: int
    email: str
    full_name: str
    role: str
    via_allowlist: bool


class LogCleanupResult(CamelModel):
    """Result of pruning old audit entries."""

    success: bool = True
    deleted: int
