"""Prometheus-style metrics endpoint and request tracking middleware.

Tracks request count, latency, in-flight requests, error rate and traffic per
API section (advisors, blog, ...).
"""
import logging
import time
from collections import defaultdict, deque

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 0.5
MAX_SAMPLES = 10_000

_metrics: dict[str, float] = defaultdict(float)
_sections: dict[str, float] = defaultdict(float)
_durations: deque[float] = deque(maxlen=MAX_SAMPLES)


def _section(path: str) -> str:
    parts = path.strip("/").split("/")
    if len(parts) >= 3 and parts[0] == "api" and parts[1] == "v1":
        return parts[2]
    return parts[0] or "root"


def reset_metrics() -> None:
    _metrics.clear()
    _sections.clear()
    _durations.clear()


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path == "/metrics":
            return await call_next(request)

        start = time.perf_counter()
        _metrics["http_requests_active"] += 1
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        except Exception:
            _metrics["http_requests_errors_total"] += 1
            raise
        finally:
            duration = time.perf_counter() - start
            _metrics["http_requests_active"] -= 1
            _metrics["http_requests_total"] += 1
            _metrics[f"http_requests_by_status_{status // 100}xx"] += 1
            _sections[_section(path)] += 1
            _durations.append(duration)

            if duration > SLOW_REQUEST_SECONDS:
                logger.warning("Slow request %s %s took %.0f ms (status %s)",
                               request.method, path, duration * 1000, status)

        return response


def _percentile(data: list[float], p: float) -> float:
    if not data:
        return 0.0
    sorted_data = sorted(data)
    idx = int(len(sorted_data) * p / 100)
    return sorted_data[min(idx, len(sorted_data) - 1)]


def render_metrics() -> str:
    durations = list(_durations)
    lines = [
        "# HELP http_requests_total Total HTTP requests",
        "# TYPE http_requests_total counter",
        f'http_requests_total {_metrics["http_requests_total"]:.0f}',
        "# HELP http_requests_active In-flight HTTP requests",
        "# TYPE http_requests_active gauge",
        f'http_requests_active {_metrics["http_requests_active"]:.0f}',
        "# HELP http_requests_errors_total Requests that raised",
        "# TYPE http_requests_errors_total counter",
        f'http_requests_errors_total {_metrics["http_requests_errors_total"]:.0f}',
        "# HELP http_request_duration_seconds Request duration",
        "# TYPE http_request_duration_seconds summary",
    ]
    for q in (50, 90, 95, 99):
        lines.append(f'http_request_duration_seconds{{quantile="0.{q}"}} {_percentile(durations, q):.6f}')
    lines.append(f"http_request_duration_seconds_count {len(durations)}")
    lines += ["# HELP http_requests_by_status HTTP requests by status class",
              "# TYPE http_requests_by_status counter"]
    for cls in ("2xx", "3xx", "4xx", "5xx"):
        lines.append(f'http_requests_by_status{{status="{cls}"}} {_metrics[f"http_requests_by_status_{cls}"]:.0f}')
    lines += ["# HELP http_requests_by_section HTTP requests by API section",
              "# TYPE http_requests_by_section counter"]
    for section, count in sorted(_sections.items()):
        lines.append(f'http_requests_by_section{{section="{section}"}} {count:.0f}')
    return "\n".join(lines) + "\n"


def setup_metrics(app: FastAPI) -> None:
    """Register the /metrics endpoint."""

    @app.get("/metrics", tags=["monitoring"], include_in_schema=False)
    async def metrics_endpoint():
        return PlainTextResponse(render_metrics(), media_type="text/plain")
