"""Admin audit log service."""

from datetime import UTC, datetime, timedelta

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.admin_logs import admin_logs

logger = structlog.get_logger(__name__)


class AuditService:
    """Records and queries admin actions."""

    async def record(
        self,
        db: AsyncSession,
        admin_id: int | None,
        action: str,
        method: str,
        endpoint: str,
        ip: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Write an audit entry. Failures are logged and never raised."""
        try:
            await db.execute(
                admin_logs.insert().values(
                    admin_id=admin_id,
                    action=action,
                    method=method,
                    endpoint=endpoint,
                    ip=ip,
                    user_agent=user_agent,
                    timestamp=datetime.now(UTC),
                )
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("admin_log_write_failed", action=action, error=str(e))

    async def list_logs(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 50,
        action: str | None = None,
        admin_id: int | None = None,
    ) -> tuple[list[dict], int]:
        """Audit entries, newest first."""
        conditions: list = []
        if action:
            conditions.append(admin_logs.c.action == action)
        if admin_id is not None:
            conditions.append(admin_logs.c.admin_id == admin_id)

        total = (
            await db.execute(select(func.count()).select_from(admin_logs).where(*conditions))
        ).scalar_one()
        result = await db.execute(
            select(admin_logs)
            .where(*conditions)
            .order_by(admin_logs.c.timestamp.desc(), admin_logs.c.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [dict(row) for row in result.mappings().all()], total

    async def cleanup(self, db: AsyncSession, days: int = 30) -> int:
        """Delete entries older than ``days`` and return how many were removed."""
        cutoff = datetime.now(UTC) - timedelta(days=days)
        result = await db.execute(delete(admin_logs).where(admin_logs.c.timestamp < cutoff))
        await db.commit()
        deleted = result.rowcount or 0  # type: ignore[attr-defined]
        logger.info("admin_logs_cleaned_up", deleted=deleted, days=days)
        return deleted
