"""Audit trail middleware for successful authenticated mutations.

Services persist detailed ``audit_logs`` rows for business actions. This
middleware adds one structured log event per successful POST/PUT/PATCH/DELETE
so every write, including ones without a service-level audit row, can be
traced to a caller.
"""
import uuid as _uuid

import structlog
from fastapi import Request
from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.models.audit_log import AuditAction
from app.services.auth_service import decode_access_token

logger = structlog.get_logger("audit")

AUDITABLE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

# Credential exchanges are logged by the auth router itself
SKIP_PATHS = {
    "/api/v1/auth/login",
    "/api/v1/auth/refresh",
    "/api/v1/auth/signup",
    "/api/v1/auth/forgot-password",
    "/api/v1/auth/reset-password",
}

METHOD_ACTION_MAP = {
    "POST": AuditAction.CREATE,
    "PUT": AuditAction.UPDATE,
    "PATCH": AuditAction.UPDATE,
    "DELETE": AuditAction.DELETE,
}

# URL segment -> entity type
RESOURCE_NAMES = {
    "advisors": "advisor",
    "investment-firms": "investment_firm",
    "accounting-firms": "accounting_firm",
    "blog": "blog_post",
    "meeting-requests": "meeting_request",
    "newsletter": "newsletter_signup",
    "profiles": "profile",
    "uploads": "upload",
    "auth": "user",
}


def _extract_resource_info(path: str) -> tuple[str, str | None]:
    """Extract entity type and ID from an API path.

    Examples:
        /api/v1/advisors -> ("advisor", None)
        /api/v1/advisors/<uuid>/approve -> ("advisor", "<uuid>")
        /api/v1/blog/posts/<uuid> -> ("blog_post", "<uuid>")
    """
    parts = path.strip("/").split("/")
    if len(parts) < 3 or parts[0] != "api" or parts[1] != "v1":
        return "unknown", None

    resource = RESOURCE_NAMES.get(parts[2], parts[2].replace("-", "_"))
    if parts[2] == "blog" and len(parts) > 3 and parts[3] == "categories":
        resource = "blog_category"
    for candidate in parts[3:]:
        try:
            _uuid.UUID(candidate)
        except ValueError:
            continue
        return resource, candidate
    return resource, None


def _resolve_action(method: str, path: str) -> AuditAction:
    last = path.rstrip("/").rsplit("/", 1)[-1]
    if last == "approve":
        return AuditAction.APPROVE
    if last == "reject":
        return AuditAction.REJECT
    return METHOD_ACTION_MAP.get(method, AuditAction.UPDATE)


def _extract_user_id(request: Request) -> str | None:
    auth = request.headers.get("authorization", "")
    if not auth.startswith("Bearer "):
        return None
    try:
        return decode_access_token(auth[7:]).get("sub")
    except JWTError:
        return None


class AuditMiddleware(BaseHTTPMiddleware):
    """Emit an ``audit`` event for every successful authenticated mutation."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method not in AUDITABLE_METHODS:
            return await call_next(request)

        path = request.url.path
        if not path.startswith("/api/") or path in SKIP_PATHS:
            return await call_next(request)

        response = await call_next(request)
        if response.status_code >= 400:
            return response

        user_id = _extract_user_id(request)
        if not user_id:
            return response

        entity_type, entity_id = _extract_resource_info(path)
        logger.info(
            "audit",
            user_id=user_id,
            action=_resolve_action(request.method, path).value,
            entity_type=entity_type,
            entity_id=entity_id,
            method=request.method,
            path=path,
            status=response.status_code,
            ip=request.client.host if request.client else "unknown",
        )
        return response
