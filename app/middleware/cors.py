"""CORS middleware and cookie security configuration."""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.config import settings

_COOKIE_FLAGS = ("SameSite=Lax", "Secure", "HttpOnly")


def allowed_origins() -> list[str]:
    return [o.strip() for o in settings.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]


def setup_cors(app: FastAPI) -> None:
    """Allow the browser front end (and the static pages it hydrates) to call the API."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-RateLimit-Limit", "X-RateLimit-Window"],
    )


def harden_cookie(cookie: str) -> str:
    lowered = cookie.lower()
    for flag in _COOKIE_FLAGS:
        if flag.split("=")[0].lower() not in lowered:
            cookie += f"; {flag}"
    return cookie


class CookieSecurityMiddleware(BaseHTTPMiddleware):
    """Add SameSite, Secure and HttpOnly to any cookie a handler sets.

    Authentication uses bearer tokens, so no endpoint sets cookies today.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)

        raw_cookies = [v.decode("latin-1") for k, v in response.raw_headers if k.lower() == b"set-cookie"]
        if raw_cookies:
            headers = [(k, v) for k, v in response.raw_headers if k.lower() != b"set-cookie"]
            headers.extend((b"set-cookie", harden_cookie(c).encode("latin-1")) for c in raw_cookies)
            response.raw_headers = headers  # type: ignore[attr-defined]
        return response


def setup_cookie_security(app: FastAPI) -> None:
    app.add_middleware(CookieSecurityMiddleware)
