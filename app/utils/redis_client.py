"""Redis client helper -- provides a shared async Redis connection.

Callers treat any exception from ``get_redis`` as "redis unavailable" and use
their in-process fallback. After a failed connection attempt no new attempt
is made for ``RECONNECT_INTERVAL_SECONDS``.
"""
import logging
import time

from redis.asyncio import Redis, from_url

from app.config import settings

logger = logging.getLogger(__name__)

RECONNECT_INTERVAL_SECONDS = 30.0

_redis: Redis | None = None
_last_failure: float | None = None


class RedisUnavailableError(ConnectionError):
    """Raised while redis is considered down."""


async def get_redis() -> Redis:
    """Get or create the async Redis client."""
    global _redis, _last_failure
    if _redis is not None:
        return _redis

    if _last_failure is not None and time.monotonic() - _last_failure < RECONNECT_INTERVAL_SECONDS:
        raise RedisUnavailableError("Redis marked unavailable")

    client = from_url(settings.REDIS_URL, decode_responses=True)
    try:
        await client.ping()
    except Exception:
        _last_failure = time.monotonic()
        logger.warning("Redis unavailable at %s, using in-memory fallback", settings.REDIS_URL)
        await client.aclose()
        raise
    logger.info("Redis connected: %s", settings.REDIS_URL)
    _redis = client
    _last_failure = None
    return _redis


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None
