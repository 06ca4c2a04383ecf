"""Blog CMS tests: posts, draft visibility, categories and the editor endpoint."""
import pytest
from sqlalchemy import select

from app.models.audit_log import AuditAction, AuditLog


async def _create_post(client, headers, **fields) -> dict:
    body = {"title": "Investment Strategies 2024", "content": "## Diversify", "excerpt": "Portfolio tips"}
    body.update(fields)
    resp = await client.post("/api/v1/blog/posts", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.mark.asyncio
async def test_create_draft_post(client, admin_auth):
    admin, headers = admin_auth
    post = await _create_post(client, headers)
    assert post["slug"] == "investment-strategies-2024"
    assert post["status"] == "draft"
    assert post["published_at"] is None
    assert post["author_id"] == str(admin.id)
    assert post["categories"] == []


@pytest.mark.asyncio
async def test_create_published_post_sets_published_at(client, admin_auth):
    _, headers = admin_auth
    post = await _create_post(client, headers, status="published", categories=["Investing", "Finance"])
    assert post["status"] == "published"
    assert post["published_at"] is not None
    assert post["categories"] == ["Finance", "Investing"]


@pytest.mark.asyncio
async def test_post_requires_admin(client, user_auth):
    _, headers = user_auth
    resp = await client.post("/api/v1/blog/posts", json={"title": "Mine"}, headers=headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_post_rejects_unknown_category(client, admin_auth):
    _, headers = admin_auth
    resp = await client.post(
        "/api/v1/blog/posts", json={"title": "Odd", "categories": ["Gardening"]}, headers=headers,
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_post_slug_conflict(client, admin_auth):
    _, headers = admin_auth
    await _create_post(client, headers, slug="taken")
    resp = await client.post("/api/v1/blog/posts", json={"title": "Other", "slug": "taken"}, headers=headers)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_drafts_hidden_from_readers(client, admin_auth, user_auth):
    _, admin_headers = admin_auth
    _, user_headers = user_auth
    await _create_post(client, admin_headers, title="Draft Only")
    await _create_post(client, admin_headers, title="Live Post", status="published")

    public = await client.get("/api/v1/blog/posts")
    assert [p["title"] for p in public.json()["data"]] == ["Live Post"]

    as_user = await client.get("/api/v1/blog/posts", headers=user_headers)
    assert [p["title"] for p in as_user.json()["data"]] == ["Live Post"]

    as_admin = await client.get("/api/v1/blog/posts", headers=admin_headers)
    assert as_admin.json()["pagination"]["total"] == 2

    drafts = await client.get("/api/v1/blog/posts", params={"status": "draft"}, headers=admin_headers)
    assert [p["title"] for p in drafts.json()["data"]] == ["Draft Only"]

    assert (await client.get("/api/v1/blog/posts/draft-only")).status_code == 404
    assert (await client.get("/api/v1/blog/posts/draft-only", headers=admin_headers)).status_code == 200
    assert (await client.get("/api/v1/blog/posts/live-post")).status_code == 200


@pytest.mark.asyncio
async def test_status_filter_ignored_for_readers(client, admin_auth):
    _, headers = admin_auth
    await _create_post(client, headers, title="Secret Draft")
    resp = await client.get("/api/v1/blog/posts", params={"status": "draft"})
    assert resp.json()["data"] == []


@pytest.mark.asyncio
async def test_publish_draft(client, admin_auth, db_session):
    _, headers = admin_auth
    post = await _create_post(client, headers)

    # cache the empty public listing first
    assert (await client.get("/api/v1/blog/posts")).json()["data"] == []

    resp = await client.put(f"/api/v1/blog/posts/{post['id']}", json={"status": "published"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["published_at"] is not None

    public = await client.get("/api/v1/blog/posts")
    assert [p["slug"] for p in public.json()["data"]] == [post["slug"]]

    rows = (await db_session.execute(
        select(AuditLog).where(AuditLog.entity_type == "blog_post")
    )).scalars().all()
    assert [r.action for r in rows].count(AuditAction.PUBLISH) == 1


@pytest.mark.asyncio
async def test_list_filters_by_category_and_search(client, admin_auth):
    _, headers = admin_auth
    await _create_post(client, headers, title="Tax Moves", status="published", categories=["Taxes"])
    await _create_post(client, headers, title="Index Funds", status="published", categories=["Investing"])

    resp = await client.get("/api/v1/blog/posts", params={"category": "Taxes"})
    assert [p["title"] for p in resp.json()["data"]] == ["Tax Moves"]

    resp = await client.get("/api/v1/blog/posts", params={"search": "index"})
    assert [p["title"] for p in resp.json()["data"]] == ["Index Funds"]


@pytest.mark.asyncio
async def test_update_replaces_categories(client, admin_auth):
    _, headers = admin_auth
    post = await _create_post(client, headers, categories=["Taxes", "Finance"])
    resp = await client.put(
        f"/api/v1/blog/posts/{post['id']}", json={"categories": ["Finance", "Retirement"]}, headers=headers,
    )
    assert resp.json()["data"]["categories"] == ["Finance", "Retirement"]


@pytest.mark.asyncio
async def test_update_rejects_null_for_required_fields(client, admin_auth):
    _, headers = admin_auth
    post = await _create_post(client, headers)
    resp = await client.put(
        f"/api/v1/blog/posts/{post['id']}", json={"title": None, "status": None}, headers=headers,
    )
    assert resp.status_code == 422
    assert {err["loc"][-1] for err in resp.json()["detail"]} == {"title", "status"}

    resp = await client.put(f"/api/v1/blog/posts/{post['id']}", json={"excerpt": None}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Investment Strategies 2024"
    assert resp.json()["data"]["excerpt"] is None


@pytest.mark.asyncio
async def test_delete_post(client, admin_auth):
    _, headers = admin_auth
    post = await _create_post(client, headers, status="published", categories=["Taxes"])
    resp = await client.delete(f"/api/v1/blog/posts/{post['id']}", headers=headers)
    assert resp.status_code == 200
    assert (await client.get(f"/api/v1/blog/posts/{post['slug']}")).status_code == 404


# --- Categories ---


@pytest.mark.asyncio
async def test_create_and_list_categories(client, admin_auth):
    _, headers = admin_auth
    resp = await client.post("/api/v1/blog/categories", json={"name": "Real Estate"}, headers=headers)
    assert resp.status_code == 201
    assert resp.json()["data"]["slug"] == "real-estate"

    again = await client.post("/api/v1/blog/categories", json={"name": "Real Estate"}, headers=headers)
    assert again.status_code == 409

    bad = await client.post("/api/v1/blog/categories", json={"name": "Gardening"}, headers=headers)
    assert bad.status_code == 422

    listed = await client.get("/api/v1/blog/categories")
    assert [c["name"] for c in listed.json()["data"]] == ["Real Estate"]


@pytest.mark.asyncio
async def test_post_category_endpoints(client, admin_auth):
    _, headers = admin_auth
    post = await _create_post(client, headers)
    base = f"/api/v1/blog/posts/{post['id']}/categories"

    resp = await client.post(base, json={"name": "Taxes"}, headers=headers)
    assert resp.json()["data"] == ["Taxes"]
    # adding twice is a no-op
    resp = await client.post(base, json={"name": "Taxes"}, headers=headers)
    assert resp.json()["data"] == ["Taxes"]
    await client.post(base, json={"name": "Banking"}, headers=headers)

    assert (await client.get(base, headers=headers)).json()["data"] == ["Banking", "Taxes"]

    resp = await client.delete(f"{base}/Taxes", headers=headers)
    assert resp.json()["data"] == ["Banking"]

    resp = await client.delete(f"{base}/Taxes", headers=headers)
    assert resp.status_code == 404

    resp = await client.delete(base, headers=headers)
    assert resp.json()["data"] == []


# --- Editor ---


@pytest.mark.asyncio
async def test_editor_bold(client, admin_auth):
    _, headers = admin_auth
    resp = await client.post(
        "/api/v1/blog/editor/format",
        json={"text": "hello world", "selection_start": 0, "selection_end": 5, "action": "bold"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"] == {"text": "**hello** world", "cursor": 9}


@pytest.mark.asyncio
async def test_editor_heading_replaces_marker(client, admin_auth):
    _, headers = admin_auth
    resp = await client.post(
        "/api/v1/blog/editor/format",
        json={"text": "intro\n# Title", "selection_start": 8, "selection_end": 8, "action": "heading2"},
        headers=headers,
    )
    assert resp.json()["data"]["text"] == "intro\n## Title"


@pytest.mark.asyncio
async def test_editor_unknown_action(client, admin_auth):
    _, headers = admin_auth
    resp = await client.post(
        "/api/v1/blog/editor/format",
        json={"text": "x", "selection_start": 0, "selection_end": 1, "action": "blink"},
        headers=headers,
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_editor_requires_admin(client, user_auth):
    _, headers = user_auth
    resp = await client.post(
        "/api/v1/blog/editor/format",
        json={"text": "x", "selection_start": 0, "selection_end": 1, "action": "bold"},
        headers=headers,
    )
    assert resp.status_code == 403
