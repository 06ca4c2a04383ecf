"""Middleware tests: audit events, rate limiting, cookies, metrics and error format."""
import uuid

import pytest
from structlog.testing import capture_logs

from app.middleware.audit_middleware import _extract_resource_info, _resolve_action
from app.middleware.cors import harden_cookie
from app.middleware.metrics import _section, render_metrics
from app.middleware.rate_limiter import RateLimitMiddleware
from app.models.audit_log import AuditAction


# --- Audit ---

class TestAuditHelpers:
    def test_collection_path(self):
        assert _extract_resource_info("/api/v1/advisors") == ("advisor", None)

    def test_id_in_path(self):
        rid = str(uuid.uuid4())
        assert _extract_resource_info(f"/api/v1/advisors/{rid}/approve") == ("advisor", rid)
        assert _extract_resource_info(f"/api/v1/blog/posts/{rid}") == ("blog_post", rid)
        assert _extract_resource_info(f"/api/v1/investment-firms/{rid}/similar") == ("investment_firm", rid)

    def test_blog_categories(self):
        assert _extract_resource_info("/api/v1/blog/categories") == ("blog_category", None)

    def test_unknown_paths(self):
        assert _extract_resource_info("/health") == ("unknown", None)
        assert _extract_resource_info("/api/v1/widgets") == ("widgets", None)

    def test_resolve_action(self):
        assert _resolve_action("PATCH", "/api/v1/advisors/x/approve") == AuditAction.APPROVE
        assert _resolve_action("PATCH", "/api/v1/advisors/x/reject") == AuditAction.REJECT
        assert _resolve_action("POST", "/api/v1/advisors") == AuditAction.CREATE
        assert _resolve_action("PUT", "/api/v1/advisors/me") == AuditAction.UPDATE
        assert _resolve_action("DELETE", "/api/v1/blog/posts/x") == AuditAction.DELETE


@pytest.mark.asyncio
async def test_audit_event_for_authenticated_write(client, admin_auth):
    admin, headers = admin_auth
    with capture_logs() as logs:
        resp = await client.post("/api/v1/blog/categories", json={"name": "Taxes"}, headers=headers)
    assert resp.status_code == 201

    events = [e for e in logs if e["event"] == "audit"]
    assert len(events) == 1
    assert events[0]["user_id"] == str(admin.id)
    assert events[0]["action"] == "create"
    assert events[0]["entity_type"] == "blog_category"


@pytest.mark.asyncio
async def test_no_audit_event_for_reads_failures_or_anonymous(client, user_auth):
    _, headers = user_auth
    with capture_logs() as logs:
        await client.get("/api/v1/advisors")
        await client.post("/api/v1/blog/categories", json={"name": "Taxes"}, headers=headers)  # 403
        await client.post("/api/v1/newsletter/subscribe", json={"email": "anon@example.com"})
    assert [e for e in logs if e["event"] == "audit"] == []


# --- Rate limiting ---

class TestRateLimitConfig:
    def test_credential_endpoints_are_strict(self):
        mw = RateLimitMiddleware(app=None)
        assert mw._get_limit("/api/v1/auth/login") == (10, 60)
        assert mw._get_limit("/api/v1/auth/signup") == (5, 60)
        assert mw._get_limit("/api/v1/uploads/advisor-headshots") == (30, 60)
        assert mw._get_limit("/api/v1/advisors") == (120, 60)


@pytest.mark.asyncio
async def test_signup_rate_limit(client):
    statuses = []
    for i in range(6):
        resp = await client.post("/api/v1/auth/signup", json={
            "email": f"burst{i}@test.com",
            "password": "SecurePass123",
            "confirm_password": "SecurePass123",
            "first_name": "Burst",
            "last_name": "User",
            "agree_to_terms": True,
        })
        statuses.append(resp.status_code)
    assert statuses[:5] == [201] * 5
    assert statuses[5] == 429
    assert resp.json()["title"] == "Too Many Requests"


@pytest.mark.asyncio
async def test_rate_limit_headers(client):
    resp = await client.get("/api/v1/advisors")
    assert resp.headers["X-RateLimit-Limit"] == "120"
    assert resp.headers["X-RateLimit-Window"] == "60s"


@pytest.mark.asyncio
async def test_health_is_exempt(client):
    resp = await client.get("/health")
    assert "X-RateLimit-Limit" not in resp.headers


# --- Cookies ---

def test_harden_cookie_adds_missing_flags():
    hardened = harden_cookie("session=abc; Path=/")
    assert "SameSite=Lax" in hardened
    assert "Secure" in hardened
    assert "HttpOnly" in hardened


def test_harden_cookie_keeps_existing_flags():
    cookie = "session=abc; SameSite=Strict; Secure; HttpOnly"
    assert harden_cookie(cookie) == cookie


# --- Metrics ---

def test_section():
    assert _section("/api/v1/advisors/jane") == "advisors"
    assert _section("/sitemap.xml") == "sitemap.xml"
    assert _section("/") == "root"


@pytest.mark.asyncio
async def test_metrics_endpoint(client):
    await client.get("/api/v1/advisors")
    await client.get("/api/v1/blog/posts")
    await client.get("/api/v1/does-not-exist")

    resp = await client.get("/metrics")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    body = resp.text
    assert "http_requests_total 3" in body
    assert 'http_requests_by_status{status="2xx"} 2' in body
    assert 'http_requests_by_status{status="4xx"} 1' in body
    assert 'http_requests_by_section{section="advisors"} 1' in body
    assert body == render_metrics()


# --- Error format ---

@pytest.mark.asyncio
async def test_http_errors_use_detail(client):
    resp = await client.get("/api/v1/advisors/nobody")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Advisor not found"}


@pytest.mark.asyncio
async def test_validation_errors_are_422(client):
    resp = await client.post("/api/v1/newsletter/subscribe", json={})
    assert resp.status_code == 422
    assert isinstance(resp.json()["detail"], list)
