"""Expo push notification service."""

import re
from datetime import UTC, datetime
from typing import Any

import httpx
import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationException
from app.models.push_tokens import push_tokens

logger = structlog.get_logger(__name__)

# Expo accepts at most 100 messages per request
EXPO_CHUNK_SIZE = 100

_EXPO_TOKEN_RE = re.compile(r"^Expo(nent)?PushToken\[.+\]$")


def is_expo_push_token(token: str | None) -> bool:
    """Whether ``token`` looks like an Expo push token."""
    return bool(token) and _EXPO_TOKEN_RE.match(token) is not None  # type: ignore[arg-type]


def chunk_messages(messages: list[dict], size: int = EXPO_CHUNK_SIZE) -> list[list[dict]]:
    """Split messages into request-sized chunks."""
    return [messages[i : i + size] for i in range(0, len(messages), size)]


class PushService:
    """Registers devices and sends broadcasts through the Expo push API."""

    def __init__(
        self,
        push_url: str,
        access_token: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.push_url = push_url
        self.access_token = access_token
        self.timeout = timeout
        self._transport = transport

    async def register_token(
        self,
        db: AsyncSession,
        token: str,
        platform: str = "unknown",
        user_id: int | None = None,
    ) -> None:
        """Insert or refresh a device token."""
        if not is_expo_push_token(token):
            raise ValidationException("Invalid Expo push token")

        now = datetime.now(UTC)
        existing = (
            await db.execute(select(push_tokens.c.id).where(push_tokens.c.token == token))
        ).first()

        if existing is None:
            await db.execute(
                push_tokens.insert().values(
                    token=token, platform=platform, user_id=user_id, last_seen_at=now
                )
            )
        else:
            values: dict = {"platform": platform, "last_seen_at": now}
            if user_id is not None:
                values["user_id"] = user_id
            await db.execute(
                update(push_tokens).where(push_tokens.c.id == existing.id).values(**values)
            )
        await db.commit()

        logger.info("push_token_registered", platform=platform, user_id=user_id)

    async def broadcast(
        self,
        db: AsyncSession,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> dict[str, int]:
        """
        Send a notification to every registered device.

        Invalid tokens are skipped. A failed chunk is logged and counted as
        failed; it does not stop the remaining chunks.

        Returns:
            Counts of total, sent, failed and skipped tokens
        """
        result = await db.execute(select(push_tokens.c.token))
        tokens = [row.token for row in result]

        messages = [
            {"to": token, "sound": "default", "title": title, "body": body, "data": data or {}}
            for token in tokens
            if is_expo_push_token(token)
        ]
        skipped = len(tokens) - len(messages)
        chunks = chunk_messages(messages)

        logger.info(
            "push_broadcast_started",
            devices=len(tokens),
            messages=len(messages),
            chunks=len(chunks),
        )

        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        sent = failed = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for chunk in chunks:
                try:
                    response = await client.post(self.push_url, json=chunk, headers=headers)
                    response.raise_for_status()
                    payload = response.json()
                except (httpx.HTTPError, ValueError) as e:
                    logger.error("push_chunk_failed", size=len(chunk), error=str(e))
                    failed += len(chunk)
                    continue

                tickets = payload.get("data", []) if isinstance(payload, dict) else []
                errors = sum(1 for t in tickets if t.get("status") == "error")
                sent += len(chunk) - errors
                failed += errors

        logger.info("push_broadcast_completed", sent=sent, failed=failed, skipped=skipped)
        return {"total": len(tokens), "sent": sent, "failed": failed, "skipped": skipped}
