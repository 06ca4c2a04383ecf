"""Redis-based rate limiting middleware.

Counts requests per caller and endpoint using Redis INCR + EXPIRE and falls
back to an in-process sliding window when Redis is unavailable.
"""
import hashlib
import logging
import time
from collections import defaultdict

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# In-memory fallback when Redis is not available
_memory_store: dict[str, list[float]] = defaultdict(list)

EXEMPT_PATHS = {"/health", "/metrics", "/docs", "/redoc", "/openapi.json"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting with per-endpoint limits.

    Credential endpoints are strict to slow down brute forcing and reset
    spamming. Public write forms (meeting requests, newsletter) are limited per
    client address.
    """

    # Endpoint prefix -> (limit, window_seconds)
    LIMITS: dict[str, tuple[int, int]] = {
        "/api/v1/auth/login": (10, 60),
        "/api/v1/auth/signup": (5, 60),
        "/api/v1/auth/forgot-password": (5, 300),
        "/api/v1/auth/reset-password": (10, 300),
        "/api/v1/auth/refresh": (20, 60),
        "/api/v1/uploads/": (30, 60),
        "/api/v1/meeting-requests": (20, 60),
        "/api/v1/newsletter/subscribe": (10, 60),
        "default": (120, 60),
    }

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in EXEMPT_PATHS:
            return await call_next(request)

        caller = self._get_caller_identifier(request)
        limit, window = self._get_limit(path)

        if not await self._check_limit(caller, path, limit, window):
            logger.warning("Rate limit exceeded for %s on %s", caller, path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "type": "about:blank",
                    "title": "Too Many Requests",
                    "status": 429,
                    "detail": "Rate limit exceeded. Please try again later.",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Window"] = f"{window}s"
        return response

    def _get_caller_identifier(self, request: Request) -> str:
        auth = request.headers.get("authorization", "")
        if auth.startswith("Bearer "):
            digest = hashlib.sha256(auth[7:].encode()).hexdigest()[:32]
            return f"token:{digest}"
        client = request.client
        return f"ip:{client.host if client else 'unknown'}"

    def _get_limit(self, path: str) -> tuple[int, int]:
        for pattern, limit in self.LIMITS.items():
            if pattern != "default" and path.startswith(pattern):
                return limit
        return self.LIMITS["default"]

    async def _check_limit(self, caller: str, path: str, limit: int, window: int) -> bool:
        """Try Redis first, fall back to the in-memory window."""
        try:
            from app.utils.redis_client import get_redis
            redis = await get_redis()
            return await check_rate_limit_redis(redis, caller, path, limit, window)
        except Exception:
            pass

        key = f"ratelimit:{caller}:{path}"
        now = time.time()
        _memory_store[key] = [t for t in _memory_store[key] if t > now - window]
        if len(_memory_store[key]) >= limit:
            return False
        _memory_store[key].append(now)
        return True


async def check_rate_limit_redis(
    redis_client, caller: str, endpoint: str, limit: int = 120, window: int = 60
) -> bool:
    """Fixed-window counter; True if the request is allowed."""
    key = f"ratelimit:{caller}:{endpoint}"
    current = await redis_client.incr(key)
    if current == 1:
        await redis_client.expire(key, window)
    return current <= limit
