"""Investment and accounting firm directory tests."""
import uuid

import pytest
from sqlalchemy import select

from app.models.audit_log import AuditAction, AuditLog


async def _create_investment_firm(client, headers, **fields) -> dict:
    body = {"name": "Acme Capital", "headquarters": "New York", "asset_class": ["Real Estate"]}
    body.update(fields)
    resp = await client.post("/api/v1/investment-firms", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def _create_accounting_firm(client, headers, **fields) -> dict:
    body = {"name": "Ledger & Co", "services": ["Bookkeeping"], "specialties": ["SMB Owner"]}
    body.update(fields)
    resp = await client.post("/api/v1/accounting-firms", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


# ── Investment firms ──


@pytest.mark.asyncio
async def test_create_investment_firm_with_children(client, admin_auth):
    _, headers = admin_auth
    data = await _create_investment_firm(
        client, headers,
        name="Edly",
        minimum_investment=0,
        established="2018-05-01",
        payout="Monthly",
        features=["Monthly payouts", "Income share agreements"],
        leadership=[{"name": "Adam Deutsch", "position": "CEO"}],
        money_making_methods=[{"title": "Interest", "description": "Borrowers repay with interest"}],
        clients=["Students"],
        regulatory_info=["Reg A+"],
    )
    assert data["slug"] == "edly"
    assert data["established"] == "2018-05-01"
    assert data["features"] == ["Monthly payouts", "Income share agreements"]
    assert data["leadership"][0]["name"] == "Adam Deutsch"
    assert data["money_making_methods"][0]["title"] == "Interest"
    assert data["clients"] == ["Students"]
    assert data["regulatory_info"] == ["Reg A+"]


@pytest.mark.asyncio
async def test_investment_firm_admin_only(client, user_auth):
    _, headers = user_auth
    resp = await client.post("/api/v1/investment-firms", json={"name": "Nope"}, headers=headers)
    assert resp.status_code == 403
    resp = await client.post("/api/v1/investment-firms", json={"name": "Nope"})
    assert resp.status_code in (401, 403)


@pytest.mark.asyncio
async def test_investment_firm_slug_conflict(client, admin_auth):
    _, headers = admin_auth
    await _create_investment_firm(client, headers, slug="acme")
    resp = await client.post(
        "/api/v1/investment-firms", json={"name": "Acme Two", "slug": "acme"}, headers=headers,
    )
    assert resp.status_code == 409

    # generated slugs are made unique instead
    second = await _create_investment_firm(client, headers, name="Acme")
    assert second["slug"] == "acme-2"


@pytest.mark.asyncio
async def test_investment_firm_slug_cannot_shadow_states_route(client, admin_auth):
    _, headers = admin_auth
    firm = await _create_investment_firm(client, headers, name="States")
    assert firm["slug"] == "states-2"

    resp = await client.post(
        "/api/v1/investment-firms", json={"name": "Other", "slug": "states"}, headers=headers,
    )
    assert resp.status_code == 409
    resp = await client.put(f"/api/v1/investment-firms/{firm['id']}", json={"slug": "states"}, headers=headers)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_update_investment_firm_rejects_null_required_fields(client, admin_auth):
    _, headers = admin_auth
    firm = await _create_investment_firm(client, headers)
    resp = await client.put(
        f"/api/v1/investment-firms/{firm['id']}", json={"name": None, "asset_class": None}, headers=headers,
    )
    assert resp.status_code == 422
    assert {err["loc"][-1] for err in resp.json()["detail"]} == {"name", "asset_class"}
    assert (await client.get(f"/api/v1/investment-firms/{firm['slug']}")).json()["data"]["name"] == "Acme Capital"


@pytest.mark.asyncio
async def test_get_investment_firm_by_slug(client, admin_auth):
    _, headers = admin_auth
    await _create_investment_firm(client, headers)
    resp = await client.get("/api/v1/investment-firms/acme-capital")
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Acme Capital"

    resp = await client.get("/api/v1/investment-firms/missing")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_investment_firm_replaces_children(client, admin_auth, db_session):
    _, headers = admin_auth
    firm = await _create_investment_firm(client, headers, features=["Old"])

    resp = await client.put(
        f"/api/v1/investment-firms/{firm['id']}",
        json={"features": ["New A", "New B"], "rating": 4.2},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["features"] == ["New A", "New B"]
    assert data["rating"] == 4.2

    rows = (await db_session.execute(
        select(AuditLog).where(AuditLog.entity_type == "investment_firm")
    )).scalars().all()
    assert {r.action for r in rows} == {AuditAction.CREATE, AuditAction.UPDATE}


@pytest.mark.asyncio
async def test_list_investment_firms_filters(client, admin_auth):
    _, headers = admin_auth
    await _create_investment_firm(client, headers, name="Free Start", minimum_investment=0, asset_class=["Savings"])
    await _create_investment_firm(client, headers, name="Small Ticket", minimum_investment=100)
    await _create_investment_firm(
        client, headers, name="Mid Fund", minimum_investment=300_000, headquarters="Texas",
    )
    await _create_investment_firm(client, headers, name="Whale Fund", minimum_investment=10_000_000)

    async def names(**params):
        resp = await client.get("/api/v1/investment-firms", params=params)
        assert resp.status_code == 200
        return [f["name"] for f in resp.json()["data"]]

    assert await names() == ["Free Start", "Mid Fund", "Small Ticket", "Whale Fund"]
    assert await names(minimum="no_minimum") == ["Free Start"]
    assert await names(minimum="under_250k") == ["Small Ticket"]
    assert await names(minimum="250k_500k") == ["Mid Fund"]
    assert await names(minimum="5m_plus") == ["Whale Fund"]
    assert await names(asset_class="Savings") == ["Free Start"]
    assert await names(state="Texas") == ["Mid Fund"]
    assert await names(search="fund") == ["Mid Fund", "Whale Fund"]


@pytest.mark.asyncio
async def test_list_investment_firms_rejects_unknown_bucket(client):
    resp = await client.get("/api/v1/investment-firms", params={"minimum": "lots"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_investment_firm_states(client, admin_auth):
    _, headers = admin_auth
    await _create_investment_firm(client, headers, name="A", headquarters="Ohio")
    await _create_investment_firm(client, headers, name="B", headquarters="Ohio")
    await _create_investment_firm(client, headers, name="C", headquarters="California")
    resp = await client.get("/api/v1/investment-firms/states")
    assert resp.json()["data"] == ["California", "Ohio"]


@pytest.mark.asyncio
async def test_create_invalidates_cached_listing(client, admin_auth):
    _, headers = admin_auth
    assert (await client.get("/api/v1/investment-firms")).json()["data"] == []
    await _create_investment_firm(client, headers)
    assert len((await client.get("/api/v1/investment-firms")).json()["data"]) == 1


@pytest.mark.asyncio
async def test_similar_firms(client, admin_auth):
    _, headers = admin_auth
    main = await _create_investment_firm(client, headers, name="Main")
    other = await _create_investment_firm(client, headers, name="Other")
    third = await _create_investment_firm(client, headers, name="Third")

    resp = await client.put(
        f"/api/v1/investment-firms/{main['id']}/similar",
        json={"firm_ids": [third["id"], other["id"], other["id"]]},
        headers=headers,
    )
    assert resp.status_code == 200
    assert [f["name"] for f in resp.json()["data"]] == ["Other", "Third"]

    public = await client.get("/api/v1/investment-firms/main/similar")
    assert [f["name"] for f in public.json()["data"]] == ["Other", "Third"]

    # replacing, not appending
    await client.put(
        f"/api/v1/investment-firms/{main['id']}/similar", json={"firm_ids": [other["id"]]}, headers=headers,
    )
    public = await client.get("/api/v1/investment-firms/main/similar")
    assert [f["name"] for f in public.json()["data"]] == ["Other"]


@pytest.mark.asyncio
async def test_similar_firms_validation(client, admin_auth):
    _, headers = admin_auth
    main = await _create_investment_firm(client, headers, name="Main")

    resp = await client.put(
        f"/api/v1/investment-firms/{main['id']}/similar", json={"firm_ids": [main["id"]]}, headers=headers,
    )
    assert resp.status_code == 400

    resp = await client.put(
        f"/api/v1/investment-firms/{main['id']}/similar", json={"firm_ids": [str(uuid.uuid4())]}, headers=headers,
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_investment_firm_removes_similar_links(client, admin_auth):
    _, headers = admin_auth
    main = await _create_investment_firm(client, headers, name="Main", features=["Gone with it"])
    other = await _create_investment_firm(client, headers, name="Other")
    await client.put(
        f"/api/v1/investment-firms/{main['id']}/similar", json={"firm_ids": [other["id"]]}, headers=headers,
    )

    resp = await client.delete(f"/api/v1/investment-firms/{other['id']}", headers=headers)
    assert resp.status_code == 200
    public = await client.get("/api/v1/investment-firms/main/similar")
    assert public.json()["data"] == []

    resp = await client.delete(f"/api/v1/investment-firms/{main['id']}", headers=headers)
    assert resp.status_code == 200
    assert (await client.get("/api/v1/investment-firms/main")).status_code == 404


# ── Accounting firms ──


@pytest.mark.asyncio
async def test_create_accounting_firm_parses_fee(client, admin_auth):
    _, headers = admin_auth
    data = await _create_accounting_firm(client, headers, minimum_fee="$1,500 per year")
    assert data["slug"] == "ledger-co"
    assert data["minimum_fee"] == "$1,500 per year"
    assert data["minimum_fee_amount"] == 1500


@pytest.mark.asyncio
async def test_accounting_firm_rejects_unknown_service(client, admin_auth):
    _, headers = admin_auth
    resp = await client.post(
        "/api/v1/accounting-firms", json={"name": "Bad", "services": ["Fortune Telling"]}, headers=headers,
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_accounting_firms_filters(client, admin_auth):
    _, headers = admin_auth
    await _create_accounting_firm(client, headers, name="Free Books", minimum_fee=None)
    await _create_accounting_firm(
        client, headers, name="Monthly Books", minimum_fee="$100/mo", services=["Payroll Services"],
    )
    await _create_accounting_firm(
        client, headers, name="Big Four", minimum_fee="$250/mo",
        services=["Advisory Services"], specialties=["Ultra High Net Worth Individuals"],
    )
    await _create_accounting_firm(client, headers, name="Vague Fees", minimum_fee="Call for pricing")

    async def names(**params):
        resp = await client.get("/api/v1/accounting-firms", params=params)
        assert resp.status_code == 200
        return [f["name"] for f in resp.json()["data"]]

    # fees without a number count as no minimum
    assert await names(fee="no_minimum") == ["Free Books", "Vague Fees"]
    assert await names(fee="under_250") == ["Monthly Books"]
    assert await names(fee="250_plus") == ["Big Four"]
    assert await names(service="Payroll Services") == ["Monthly Books"]
    assert await names(specialty="Ultra High Net Worth Individuals") == ["Big Four"]
    assert await names(search="books") == ["Free Books", "Monthly Books"]


@pytest.mark.asyncio
async def test_update_accounting_firm_recomputes_fee(client, admin_auth):
    _, headers = admin_auth
    firm = await _create_accounting_firm(client, headers, minimum_fee="$100")
    resp = await client.put(
        f"/api/v1/accounting-firms/{firm['id']}", json={"minimum_fee": "$2k"}, headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["minimum_fee_amount"] == 2000


@pytest.mark.asyncio
async def test_accounting_firm_slug_conflict_on_update(client, admin_auth):
    _, headers = admin_auth
    await _create_accounting_firm(client, headers, name="First")
    second = await _create_accounting_firm(client, headers, name="Second")
    resp = await client.put(
        f"/api/v1/accounting-firms/{second['id']}", json={"slug": "first"}, headers=headers,
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_update_accounting_firm_rejects_null_required_fields(client, admin_auth):
    _, headers = admin_auth
    firm = await _create_accounting_firm(client, headers, minimum_fee="$500/mo")
    resp = await client.put(
        f"/api/v1/accounting-firms/{firm['id']}",
        json={"name": None, "services": None, "verified": None},
        headers=headers,
    )
    assert resp.status_code == 422
    assert {err["loc"][-1] for err in resp.json()["detail"]} == {"name", "services", "verified"}

    resp = await client.put(f"/api/v1/accounting-firms/{firm['id']}", json={"minimum_fee": None}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["minimum_fee_amount"] is None


@pytest.mark.asyncio
async def test_delete_accounting_firm(client, admin_auth, user_auth):
    _, headers = admin_auth
    _, user_headers = user_auth
    firm = await _create_accounting_firm(client, headers)

    resp = await client.delete(f"/api/v1/accounting-firms/{firm['id']}", headers=user_headers)
    assert resp.status_code == 403

    resp = await client.delete(f"/api/v1/accounting-firms/{firm['id']}", headers=headers)
    assert resp.status_code == 200
    assert (await client.get(f"/api/v1/accounting-firms/{firm['slug']}")).status_code == 404
    assert (await client.delete(f"/api/v1/accounting-firms/{firm['id']}", headers=headers)).status_code == 404
