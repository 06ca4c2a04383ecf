"""Newsletter signup tests."""
import pytest


@pytest.mark.asyncio
async def test_subscribe(client):
    resp = await client.post("/api/v1/newsletter/subscribe", json={"name": " Reader ", "email": " Reader@Example.com "})
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Subscribed"
    assert body["data"]["email"] == "reader@example.com"
    assert body["data"]["name"] == "Reader"


@pytest.mark.asyncio
async def test_repeat_subscribe_is_not_an_error(client):
    first = await client.post("/api/v1/newsletter/subscribe", json={"email": "reader@example.com"})
    again = await client.post("/api/v1/newsletter/subscribe", json={"email": "READER@example.com"})
    assert again.status_code == 200
    assert again.json()["message"] == "Already subscribed"
    assert again.json()["data"]["id"] == first.json()["data"]["id"]


@pytest.mark.asyncio
async def test_subscribe_invalid_email(client):
    resp = await client.post("/api/v1/newsletter/subscribe", json={"email": "nope"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_subscribers_admin_only(client, admin_auth, user_auth):
    _, admin_headers = admin_auth
    _, user_headers = user_auth
    await client.post("/api/v1/newsletter/subscribe", json={"email": "a@example.com"})
    await client.post("/api/v1/newsletter/subscribe", json={"email": "b@example.com"})

    assert (await client.get("/api/v1/newsletter/subscribers", headers=user_headers)).status_code == 403
    resp = await client.get("/api/v1/newsletter/subscribers", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["pagination"]["total"] == 2
    assert {s["email"] for s in resp.json()["data"]} == {"a@example.com", "b@example.com"}
