"""Opaque token storage: refresh tokens and password-reset tokens.

Tries Redis first and falls back to in-memory dicts.
"""
import logging
import time

from app.config import settings
from app.utils.redis_client import get_redis

logger = logging.getLogger(__name__)

# In-memory fallbacks
_refresh_tokens: dict[str, str] = {}  # refresh_token -> user_id
_reset_tokens: dict[str, tuple[str, float]] = {}  # reset_token -> (user_id, expires_at)

_REFRESH_PREFIX = "refresh:"
_RESET_PREFIX = "pwreset:"
_REFRESH_TTL = settings.REFRESH_TOKEN_EXPIRE_DAYS * 86400


async def store_refresh_token(token: str, user_id: str) -> None:
    """Store a refresh token mapping."""
    try:
        redis = await get_redis()
        await redis.set(f"{_REFRESH_PREFIX}{token}", user_id, ex=_REFRESH_TTL)
        # Also maintain a set of tokens per user for logout
        await redis.sadd(f"user_tokens:{user_id}", token)
        await redis.expire(f"user_tokens:{user_id}", _REFRESH_TTL)
        return
    except Exception:
        logger.debug("Redis unavailable for store_refresh_token, using in-memory fallback")
    _refresh_tokens[token] = user_id


async def consume_refresh_token(token: str) -> str | None:
    """Get and delete a refresh token."""
    try:
        redis = await get_redis()
        key = f"{_REFRESH_PREFIX}{token}"
        user_id = await redis.get(key)
        if user_id:
            await redis.delete(key)
            await redis.srem(f"user_tokens:{user_id}", token)
            return user_id
        return None
    except Exception:
        logger.debug("Redis unavailable for consume_refresh_token, using in-memory fallback")
    return _refresh_tokens.pop(token, None)


async def revoke_all_user_tokens(user_id: str) -> None:
    """Delete all refresh tokens for a user."""
    try:
        redis = await get_redis()
        tokens = await redis.smembers(f"user_tokens:{user_id}")
        if tokens:
            keys = [f"{_REFRESH_PREFIX}{t}" for t in tokens]
            await redis.delete(*keys)
        await redis.delete(f"user_tokens:{user_id}")
        return
    except Exception:
        logger.debug("Redis unavailable for revoke_all_user_tokens, using in-memory fallback")
    for key in [k for k, v in _refresh_tokens.items() if v == user_id]:
        _refresh_tokens.pop(key, None)


async def store_reset_token(token: str, user_id: str) -> None:
    ttl = settings.PASSWORD_RESET_EXPIRE_MINUTES * 60
    try:
        redis = await get_redis()
        await redis.set(f"{_RESET_PREFIX}{token}", user_id, ex=ttl)
        return
    except Exception:
        logger.debug("Redis unavailable for store_reset_token, using in-memory fallback")
    _reset_tokens[token] = (user_id, time.monotonic() + ttl)


async def consume_reset_token(token: str) -> str | None:
    """Return the user id for ``token`` and invalidate it."""
    try:
        redis = await get_redis()
        key = f"{_RESET_PREFIX}{token}"
        user_id = await redis.get(key)
        if user_id:
            await redis.delete(key)
        return user_id
    except Exception:
        logger.debug("Redis unavailable for consume_reset_token, using in-memory fallback")
    entry = _reset_tokens.pop(token, None)
    if entry is None:
        return None
    user_id, expires_at = entry
    if expires_at < time.monotonic():
        return None
    return user_id


def clear_memory() -> None:
    _refresh_tokens.clear()
    _reset_tokens.clear()
