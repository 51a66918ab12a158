"""Redis connection and the JSON cache behind the public doctor directory."""

import json
from typing import Any, cast

import redis
import structlog

from app.config import settings

logger = structlog.get_logger(__name__)

DOCTOR_LIST_PATTERN = "doctor:list:*"

_redis_client: redis.Redis | None = None


def doctor_key(doctor_id: int) -> str:
    """Cache key for a single doctor profile."""
    return f"doctor:{doctor_id}"


def doctor_list_key(specialty: str | None, page: int, limit: int) -> str:
    """Cache key for one page of the public doctor list."""
    return f"doctor:list:{specialty or 'all'}:{page}:{limit}"


def get_redis_client() -> redis.Redis:
    """Shared Redis client, created on first use from the REDIS_* settings."""
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            username=settings.redis_username,
            password=settings.redis_password or None,
            decode_responses=settings.redis_decode_responses,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30,
        )

    return _redis_client


async def check_redis_connection() -> bool:
    """Whether Redis answers a PING; used by the startup check and /health."""
    try:
        get_redis_client().ping()
        return True
    except Exception as exc:
        logger.warning("redis_unreachable", error=str(exc))
        return False


def close_redis_connection() -> None:
    """Close the shared client on shutdown."""
    global _redis_client

    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None


class CacheManager:
    """
    JSON cache for doctor profiles and list pages.

    The cache is an optimisation only: when Redis is down, reads come back
    as misses and writes report False, and the caller falls through to
    the database.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    def get_json(self, key: str) -> Any | None:
        """
        Load a cached value.

        Args:
            key: Cache key, e.g. ``doctor_key(7)``

        Returns:
            The decoded value, or None on a miss or a Redis error
        """
        try:
            value = cast(str | None, self.redis.get(key))
        except Exception as exc:
            logger.warning("cache_read_failed", key=key, error=str(exc))
            return None
        return json.loads(value) if value else None

    def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """
        Store a value as JSON. Dates and Decimals are written with ``str``.

        Args:
            key: Cache key
            value: JSON-serializable payload, e.g. a doctor row
            ttl: Expiry in seconds; no expiry when omitted

        Returns:
            True if Redis accepted the write
        """
        payload = json.dumps(value, default=str)
        try:
            if ttl:
                self.redis.setex(key, ttl, payload)
            else:
                self.redis.set(key, payload)
        except Exception as exc:
            logger.warning("cache_write_failed", key=key, error=str(exc))
            return False
        return True

    def delete(self, key: str) -> bool:
        """Drop one key, e.g. a doctor whose profile changed."""
        try:
            self.redis.delete(key)
        except Exception as exc:
            logger.warning("cache_delete_failed", key=key, error=str(exc))
            return False
        return True

    def delete_pattern(self, pattern: str) -> int:
        """
        Drop every key matching ``pattern`` (``DOCTOR_LIST_PATTERN`` after
        any doctor write). Keys are walked with SCAN so Redis is not blocked.

        Returns:
            Number of keys deleted
        """
        try:
            keys = list(self.redis.scan_iter(match=pattern))
            if not keys:
                return 0
            return cast(int, self.redis.delete(*keys))
        except Exception as exc:
            logger.warning("cache_delete_failed", pattern=pattern, error=str(exc))
            return 0
