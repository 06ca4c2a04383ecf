"""Tests for the storage integration and resilience patterns."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from app.integrations.resilience import (
    CircuitBreaker,
    CircuitOpenError,
    CircuitState,
    get_circuit_breaker,
    is_retryable,
    retry_with_backoff,
)
from app.integrations.storage.client import StorageClient, StorageError


def _status_error(code: int) -> httpx.HTTPStatusError:
    return httpx.HTTPStatusError("", request=MagicMock(), response=MagicMock(status_code=code))


# ═══════════════════════════════════════════════════════
# Circuit Breaker Tests
# ═══════════════════════════════════════════════════════


class TestCircuitBreaker:
    def test_initial_state_is_closed(self):
        cb = CircuitBreaker("test")
        assert cb.state == CircuitState.CLOSED

    async def test_success_keeps_closed(self):
        cb = CircuitBreaker("test")
        result = await cb.call(AsyncMock(return_value="ok"))
        assert result == "ok"
        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0

    async def test_failures_open_circuit(self):
        cb = CircuitBreaker("test", failure_threshold=3)
        failing = AsyncMock(side_effect=_status_error(503))

        for _ in range(3):
            with pytest.raises(httpx.HTTPStatusError):
                await cb.call(failing)

        assert cb.state == CircuitState.OPEN
        assert cb.failure_count == 3

    async def test_client_errors_do_not_count(self):
        cb = CircuitBreaker("test", failure_threshold=1)
        with pytest.raises(httpx.HTTPStatusError):
            await cb.call(AsyncMock(side_effect=_status_error(400)))
        with pytest.raises(ValueError):
            await cb.call(AsyncMock(side_effect=ValueError("bad input")))
        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0

    async def test_open_circuit_blocks_calls(self):
        cb = CircuitBreaker("test", failure_threshold=1, open_timeout=30)

        with pytest.raises(httpx.ConnectError):
            await cb.call(AsyncMock(side_effect=httpx.ConnectError("down")))

        assert cb.state == CircuitState.OPEN

        with pytest.raises(CircuitOpenError):
            await cb.call(AsyncMock(return_value="ok"))

    async def test_half_open_after_timeout(self):
        cb = CircuitBreaker("test", failure_threshold=1, open_timeout=0.1)

        with pytest.raises(httpx.HTTPStatusError):
            await cb.call(AsyncMock(side_effect=_status_error(500)))

        assert cb.state == CircuitState.OPEN

        # Wait for timeout
        await asyncio.sleep(0.15)

        # Should transition to HALF_OPEN and allow one call
        result = await cb.call(AsyncMock(return_value="recovered"))
        assert result == "recovered"
        assert cb.state == CircuitState.CLOSED

    async def test_half_open_failure_reopens(self):
        cb = CircuitBreaker("test", failure_threshold=1, open_timeout=0.1)

        with pytest.raises(httpx.HTTPStatusError):
            await cb.call(AsyncMock(side_effect=_status_error(500)))

        await asyncio.sleep(0.15)

        with pytest.raises(httpx.HTTPStatusError):
            await cb.call(AsyncMock(side_effect=_status_error(502)))

        assert cb.state == CircuitState.OPEN

    def test_reset(self):
        cb = CircuitBreaker("test")
        cb.state = CircuitState.OPEN
        cb.failure_count = 5
        cb.reset()
        assert cb.snapshot() == {"state": "closed", "failures": 0}

    def test_get_circuit_breaker(self):
        cb = get_circuit_breaker("storage")
        assert cb.name == "storage"
        assert get_circuit_breaker("storage") is cb  # same instance


# ═══════════════════════════════════════════════════════
# Retry Tests
# ═══════════════════════════════════════════════════════


class TestRetryWithBackoff:
    def test_is_retryable(self):
        assert is_retryable(_status_error(429))
        assert is_retryable(_status_error(503))
        assert is_retryable(httpx.ReadTimeout("slow"))
        assert not is_retryable(_status_error(404))
        assert not is_retryable(ValueError("x"))

    async def test_success_no_retry(self):
        func = AsyncMock(return_value="ok")
        result = await retry_with_backoff(func, max_retries=3, backoff_base=0.01)
        assert result == "ok"
        assert func.call_count == 1

    async def test_retry_on_failure_then_success(self):
        func = AsyncMock(side_effect=[_status_error(500), "success"])
        result = await retry_with_backoff(func, max_retries=3, backoff_base=0.01)
        assert result == "success"
        assert func.call_count == 2

    async def test_max_retries_exceeded(self):
        func = AsyncMock(side_effect=_status_error(502))

        with pytest.raises(httpx.HTTPStatusError):
            await retry_with_backoff(func, max_retries=2, backoff_base=0.01)
        assert func.call_count == 3  # initial + 2 retries

    async def test_non_retryable_status_fails_immediately(self):
        func = AsyncMock(side_effect=_status_error(400))

        with pytest.raises(httpx.HTTPStatusError):
            await retry_with_backoff(func, max_retries=3, backoff_base=0.01)
        assert func.call_count == 1  # no retries for 400

    async def test_circuit_open_is_not_retried(self):
        func = AsyncMock(side_effect=CircuitOpenError("open"))
        with pytest.raises(CircuitOpenError):
            await retry_with_backoff(func, max_retries=3, backoff_base=0.01)
        assert func.call_count == 1


# ═══════════════════════════════════════════════════════
# Storage Client Tests (mocked HTTP)
# ═══════════════════════════════════════════════════════


def _client(handler, **kwargs) -> StorageClient:
    return StorageClient(
        base_url="http://storage.test/storage/v1/",
        service_key="svc",
        transport=httpx.MockTransport(handler),
        backoff_base=0,
        **kwargs,
    )


class TestStorageClient:
    async def test_upload_returns_public_url(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"Key": "advisor-headshots/a.png"})

        async with _client(handler) as storage:
            url = await storage.upload("advisor-headshots", "a.png", b"data", "image/png")

        assert url == "http://storage.test/storage/v1/object/public/advisor-headshots/a.png"
        assert seen[0].method == "POST"
        assert seen[0].headers["apikey"] == "svc"
        assert seen[0].headers["x-upsert"] == "false"
        assert seen[0].content == b"data"

    async def test_unknown_bucket(self):
        async with _client(lambda r: httpx.Response(200)) as storage:
            with pytest.raises(StorageError):
                await storage.upload("private", "a.png", b"data", "image/png")

    async def test_retries_server_errors(self):
        responses = iter([httpx.Response(503), httpx.Response(200, json={})])

        async with _client(lambda r: next(responses), max_retries=2) as storage:
            url = await storage.upload("blog-images", "b.png", b"data", "image/png")
        assert url.endswith("/blog-images/b.png")

    async def test_client_error_raises_storage_error(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(409, json={"error": "Duplicate"})

        async with _client(handler, max_retries=3) as storage:
            with pytest.raises(StorageError, match="Upload failed"):
                await storage.upload("blog-images", "b.png", b"data", "image/png")
        assert len(calls) == 1

    async def test_open_circuit_refuses_upload(self):
        breaker = get_circuit_breaker("storage")
        breaker.state = CircuitState.OPEN
        breaker.last_failure_time = float("inf")

        async with _client(lambda r: httpx.Response(200)) as storage:
            with pytest.raises(StorageError, match="temporarily unavailable"):
                await storage.upload("blog-images", "b.png", b"data", "image/png")
