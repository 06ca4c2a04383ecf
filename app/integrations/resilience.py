"""Resilience helpers for calls to external HTTP services (object storage).

- Circuit Breaker (CLOSED → OPEN → HALF_OPEN → CLOSED)
- Retry with Exponential Backoff on transport errors and 429/5xx responses
"""
import asyncio
import logging
import time
from enum import Enum
from typing import Any, Callable

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def is_retryable(exc: BaseException) -> bool:
    """Transport failures and throttling/server errors are worth another attempt."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


# ── Circuit Breaker ──

class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """Raised when circuit breaker is open and blocking requests."""


class CircuitBreaker:
    """Stops calling a failing service for ``open_timeout`` seconds.

    - CLOSED: normal operation
    - ``failure_threshold`` consecutive retryable failures → OPEN
    - After open_timeout → HALF_OPEN (one trial call)
    - Trial success → CLOSED / failure → OPEN

    Client errors (4xx other than 429) are the caller's fault and leave the
    breaker untouched.
    """

    def __init__(self, name: str, failure_threshold: int = 5, open_timeout: float = 30.0):
        self.name = name
        self.failure_threshold = failure_threshold
        self.open_timeout = open_timeout

        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time: float = 0

    def _should_allow(self) -> bool:
        if self.state == CircuitState.CLOSED:
            return True

        if self.state == CircuitState.OPEN:
            if time.monotonic() - self.last_failure_time >= self.open_timeout:
                self.state = CircuitState.HALF_OPEN
                logger.info("Circuit %s: OPEN → HALF_OPEN", self.name)
                return True
            return False

        # HALF_OPEN: allow one trial
        return True

    def record_success(self) -> None:
        if self.state == CircuitState.HALF_OPEN:
            self.state = CircuitState.CLOSED
            logger.info("Circuit %s: HALF_OPEN → CLOSED", self.name)
        self.failure_count = 0

    def record_failure(self) -> None:
        self.failure_count += 1
        self.last_failure_time = time.monotonic()

        if self.state == CircuitState.HALF_OPEN:
            self.state = CircuitState.OPEN
            logger.warning("Circuit %s: HALF_OPEN → OPEN", self.name)
        elif self.failure_count >= self.failure_threshold:
            self.state = CircuitState.OPEN
            logger.warning("Circuit %s: CLOSED → OPEN (failures=%d)", self.name, self.failure_count)

    async def call(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Execute func through the circuit breaker."""
        if not self._should_allow():
            raise CircuitOpenError(f"Circuit '{self.name}' is OPEN")

        try:
            result = await func(*args, **kwargs)
        except Exception as exc:
            if is_retryable(exc):
                self.record_failure()
            raise
        self.record_success()
        return result

    def snapshot(self) -> dict:
        return {"state": self.state.value, "failures": self.failure_count}

    def reset(self) -> None:
        self.state = CircuitState.CLOSED
        self.failure_count = 0


# ── Retry with Exponential Backoff ──

async def retry_with_backoff(
    func: Callable[..., Any],
    *args: Any,
    max_retries: int = 3,
    backoff_base: float = 1.0,
    backoff_factor: float = 2.0,
    **kwargs: Any,
) -> Any:
    """Execute func, retrying retryable httpx errors.

    Delay: backoff_base * (backoff_factor ** attempt) → 1s, 2s, 4s by default.
    Anything else (including CircuitOpenError) propagates immediately.
    """
    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except (httpx.HTTPStatusError, httpx.TransportError) as exc:
            if not is_retryable(exc):
                raise
            if attempt >= max_retries:
                logger.error("Max retries (%d) exceeded: %s", max_retries, exc)
                raise
            delay = backoff_base * (backoff_factor ** attempt)
            logger.warning("Retry %d/%d after %.1fs: %s", attempt + 1, max_retries, delay, exc)
            await asyncio.sleep(delay)


# ── Global circuit breakers (one per external service) ──

circuit_breakers: dict[str, CircuitBreaker] = {}


def get_circuit_breaker(service: str) -> CircuitBreaker:
    """Get or create a circuit breaker for an external service."""
    if service not in circuit_breakers:
        circuit_breakers[service] = CircuitBreaker(service)
    return circuit_breakers[service]
