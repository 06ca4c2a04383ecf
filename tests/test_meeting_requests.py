"""Meeting request intake and follow-up tests."""
import uuid

import pytest
from fastapi import HTTPException

from app.models.advisor import AdvisorStatus
from app.models.meeting_request import MeetingRequestStatus
from app.services.meeting_request_service import validate_transition

from tests.conftest import _create_advisor


def _request_body(advisor_id, **overrides) -> dict:
    body = {
        "advisor_id": str(advisor_id),
        "first_name": "Ann",
        "last_name": "Lee",
        "email": "Ann.Lee@Example.com",
        "phone_number": "555-0100",
        "preferred_contact_method": "email",
        "interested_in_discussing": ["Retirement Planning", "Tax Planning"],
        "message": "Looking to retire in five years.",
    }
    body.update(overrides)
    return body


@pytest.mark.parametrize("from_status,to_status,ok", [
    (MeetingRequestStatus.PENDING, MeetingRequestStatus.CONTACTED, True),
    (MeetingRequestStatus.PENDING, MeetingRequestStatus.CANCELLED, True),
    (MeetingRequestStatus.CONTACTED, MeetingRequestStatus.COMPLETED, True),
    (MeetingRequestStatus.PENDING, MeetingRequestStatus.COMPLETED, False),
    (MeetingRequestStatus.COMPLETED, MeetingRequestStatus.PENDING, False),
    (MeetingRequestStatus.CANCELLED, MeetingRequestStatus.CONTACTED, False),
])
def test_transitions(from_status, to_status, ok):
    if ok:
        validate_transition(from_status, to_status)
    else:
        with pytest.raises(HTTPException) as exc:
            validate_transition(from_status, to_status)
        assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_create_meeting_request(client, db_session):
    advisor = await _create_advisor(db_session, name="Jane Doe", firm_name="Doe Wealth")
    resp = await client.post("/api/v1/meeting-requests", json=_request_body(advisor.id))
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["status"] == "pending"
    assert data["email"] == "ann.lee@example.com"
    assert data["advisor_name"] == "Jane Doe"
    assert data["advisor_firm_name"] == "Doe Wealth"
    assert data["interested_in_discussing"] == ["Retirement Planning", "Tax Planning"]


@pytest.mark.asyncio
async def test_request_for_unapproved_advisor_is_not_found(client, db_session):
    advisor = await _create_advisor(db_session, status=AdvisorStatus.PENDING_APPROVAL)
    resp = await client.post("/api/v1/meeting-requests", json=_request_body(advisor.id))
    assert resp.status_code == 404

    resp = await client.post("/api/v1/meeting-requests", json=_request_body(uuid.uuid4()))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_request_validation(client, db_session):
    advisor = await _create_advisor(db_session)
    resp = await client.post(
        "/api/v1/meeting-requests", json=_request_body(advisor.id, interested_in_discussing=[]),
    )
    assert resp.status_code == 422
    resp = await client.post(
        "/api/v1/meeting-requests", json=_request_body(advisor.id, preferred_contact_method="fax"),
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_admin_lists_requests(client, admin_auth, user_auth, db_session):
    _, admin_headers = admin_auth
    _, user_headers = user_auth
    first = await _create_advisor(db_session, name="First Advisor")
    second = await _create_advisor(db_session, name="Second Advisor")
    await client.post("/api/v1/meeting-requests", json=_request_body(first.id))
    await client.post("/api/v1/meeting-requests", json=_request_body(second.id))

    assert (await client.get("/api/v1/meeting-requests", headers=user_headers)).status_code == 403

    resp = await client.get("/api/v1/meeting-requests", headers=admin_headers)
    assert resp.json()["pagination"]["total"] == 2

    resp = await client.get(
        "/api/v1/meeting-requests", params={"advisor_id": str(first.id)}, headers=admin_headers,
    )
    assert [r["advisor_name"] for r in resp.json()["data"]] == ["First Advisor"]


@pytest.mark.asyncio
async def test_advisor_sees_own_requests(client, user_auth, db_session):
    user, headers = user_auth
    mine = await _create_advisor(db_session, name="Mine", user=user)
    other = await _create_advisor(db_session, name="Other")
    await client.post("/api/v1/meeting-requests", json=_request_body(mine.id))
    await client.post("/api/v1/meeting-requests", json=_request_body(other.id))

    resp = await client.get("/api/v1/meeting-requests/mine", headers=headers)
    assert resp.status_code == 200
    assert [r["advisor_name"] for r in resp.json()["data"]] == ["Mine"]


@pytest.mark.asyncio
async def test_mine_without_advisor_profile(client, user_auth):
    _, headers = user_auth
    resp = await client.get("/api/v1/meeting-requests/mine", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_owner_moves_request_through_statuses(client, user_auth, db_session):
    user, headers = user_auth
    advisor = await _create_advisor(db_session, user=user)
    created = await client.post("/api/v1/meeting-requests", json=_request_body(advisor.id))
    request_id = created.json()["data"]["id"]
    url = f"/api/v1/meeting-requests/{request_id}/status"

    resp = await client.patch(url, json={"status": "completed"}, headers=headers)
    assert resp.status_code == 400

    resp = await client.patch(url, json={"status": "contacted"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "contacted"

    resp = await client.patch(url, json={"status": "completed"}, headers=headers)
    assert resp.json()["data"]["status"] == "completed"


@pytest.mark.asyncio
async def test_other_users_cannot_change_status(client, user_auth, admin_auth, db_session):
    _, user_headers = user_auth
    _, admin_headers = admin_auth
    advisor = await _create_advisor(db_session)
    created = await client.post("/api/v1/meeting-requests", json=_request_body(advisor.id))
    url = f"/api/v1/meeting-requests/{created.json()['data']['id']}/status"

    resp = await client.patch(url, json={"status": "cancelled"}, headers=user_headers)
    assert resp.status_code == 403

    resp = await client.patch(url, json={"status": "cancelled"}, headers=admin_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_change_status_unknown_request(client, admin_auth):
    _, headers = admin_auth
    resp = await client.patch(
        f"/api/v1/meeting-requests/{uuid.uuid4()}/status", json={"status": "contacted"}, headers=headers,
    )
    assert resp.status_code == 404
