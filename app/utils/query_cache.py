"""Cache for public listing payloads.

Entries live in redis under ``qcache:<namespace>:<digest>`` and fall back to
an in-process dict when redis is unavailable. Concurrent identical lookups
share one loader call. Services queue ``invalidate_on_commit(db, namespace)``
and the session dependency drops those namespaces once the transaction has
committed, so a reader never re-caches rows from before the write.
"""
import asyncio
import hashlib
import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.utils.redis_client import get_redis

logger = logging.getLogger(__name__)

_PREFIX = "qcache:"
_PENDING_KEY = "query_cache_pending"

# key -> (expires_at, serialized payload)
_memory: dict[str, tuple[float, str]] = {}
_inflight: dict[str, asyncio.Future] = {}
# bumped by invalidate(); a load that began under an older generation is not stored
_generations: dict[str, int] = {}


def make_key(namespace: str, params: dict[str, Any]) -> str:
    raw = json.dumps(params, sort_keys=True, default=str)
    digest = hashlib.sha1(raw.encode()).hexdigest()
    return f"{_PREFIX}{namespace}:{digest}"


async def _read(key: str) -> str | None:
    try:
        redis = await get_redis()
        return await redis.get(key)
    except Exception:
        logger.debug("Redis unavailable for cache read, using in-memory fallback")
    entry = _memory.get(key)
    if entry is None:
        return None
    expires_at, payload = entry
    if expires_at < time.monotonic():
        _memory.pop(key, None)
        return None
    return payload


async def _write(key: str, payload: str, ttl: int) -> None:
    try:
        redis = await get_redis()
        await redis.set(key, payload, ex=ttl)
        return
    except Exception:
        logger.debug("Redis unavailable for cache write, using in-memory fallback")
    _memory[key] = (time.monotonic() + ttl, payload)


async def get_or_set(
    namespace: str,
    params: dict[str, Any],
    loader: Callable[[], Awaitable[Any]],
    ttl: int | None = None,
) -> Any:
    """Return the cached JSON payload for ``params`` or build it with ``loader``.

    ``loader`` must return JSON-serializable data.
    """
    ttl = settings.QUERY_CACHE_TTL_SECONDS if ttl is None else ttl
    key = make_key(namespace, params)

    if ttl > 0:
        cached = await _read(key)
        if cached is not None:
            return json.loads(cached)

    pending = _inflight.get(key)
    if pending is not None:
        return json.loads(await asyncio.shield(pending))

    generation = _generations.get(namespace, 0)
    future: asyncio.Future = asyncio.get_running_loop().create_future()
    _inflight[key] = future
    try:
        payload = json.dumps(await loader(), default=str)
        future.set_result(payload)
    except Exception as exc:
        future.set_exception(exc)
        future.exception()  # mark retrieved
        raise
    finally:
        _inflight.pop(key, None)
        if not future.done():
            future.cancel()

    if ttl > 0 and _generations.get(namespace, 0) == generation:
        await _write(key, payload, ttl)
    return json.loads(payload)


async def invalidate(namespace: str) -> None:
    """Drop every cached entry of ``namespace``."""
    _generations[namespace] = _generations.get(namespace, 0) + 1
    prefix = f"{_PREFIX}{namespace}:"
    for key in [k for k in _memory if k.startswith(prefix)]:
        _memory.pop(key, None)
    try:
        redis = await get_redis()
        keys = [key async for key in redis.scan_iter(match=f"{prefix}*")]
        if keys:
            await redis.delete(*keys)
    except Exception:
        logger.debug("Redis unavailable for cache invalidation of %s", namespace)


def invalidate_on_commit(db: AsyncSession, namespace: str) -> None:
    """Queue ``namespace`` to be dropped once ``db`` has committed."""
    db.info.setdefault(_PENDING_KEY, set()).add(namespace)


async def flush_pending(db: AsyncSession) -> None:
    """Drop the namespaces queued on ``db``. Call only after a successful commit."""
    for namespace in sorted(db.info.pop(_PENDING_KEY, ())):
        await invalidate(namespace)


def discard_pending(db: AsyncSession) -> None:
    db.info.pop(_PENDING_KEY, None)


async def clear() -> None:
    """Drop all cached entries."""
    _memory.clear()
    _generations.clear()
    try:
        redis = await get_redis()
        keys = [key async for key in redis.scan_iter(match=f"{_PREFIX}*")]
        if keys:
            await redis.delete(*keys)
    except Exception:
        logger.debug("Redis unavailable for cache clear")
