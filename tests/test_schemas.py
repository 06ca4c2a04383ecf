"""Schema tests."""
import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from app.schemas.advisor import AdvisorRegistration, AdvisorRejectRequest
from app.schemas.auth import SignUpRequest
from app.schemas.blog import EditorFormatRequest
from app.schemas.common import APIResponse, ErrorDetail, PaginationMeta
from app.schemas.firm import InvestmentFirmCreate, InvestmentFirmResponse
from app.schemas.meeting_request import MeetingRequestCreate
from app.schemas.newsletter import NewsletterSubscribe


def _registration(**overrides) -> dict:
    data = {
        "name": "Jane Doe",
        "firm_name": "Doe Wealth",
        "personal_bio": "Fifteen years of planning experience.",
        "firm_bio": "An independent fee-only firm.",
        "email": "Jane@Example.com",
        "years_of_experience": 12,
        "advisor_services": ["Financial Planning"],
        "client_type": ["Individuals"],
        "terms_accepted": True,
    }
    data.update(overrides)
    return data


def test_api_response_success():
    resp = APIResponse(status="success", data={"id": "123"}, message="OK")
    assert resp.status == "success"
    assert resp.data == {"id": "123"}


def test_pagination_build():
    assert PaginationMeta.build(total=30, page=1, per_page=15).has_next is True
    assert PaginationMeta.build(total=30, page=2, per_page=15).has_next is False
    assert PaginationMeta.build(total=0, page=1, per_page=15).has_next is False


def test_error_detail():
    err = ErrorDetail(title="Not Found", status=404, detail="Advisor not found")
    assert err.type == "about:blank"
    assert err.status == 404


# --- Auth ---

def _signup(**overrides) -> dict:
    data = {
        "email": "new@test.com",
        "password": "longenough",
        "confirm_password": "longenough",
        "first_name": "New",
        "last_name": "User",
        "agree_to_terms": True,
    }
    data.update(overrides)
    return data


def test_signup_requires_terms():
    with pytest.raises(ValidationError, match="agree to the terms"):
        SignUpRequest(**_signup(agree_to_terms=False))


def test_signup_password_mismatch():
    with pytest.raises(ValidationError, match="Passwords do not match"):
        SignUpRequest(**_signup(confirm_password="different1"))


def test_signup_short_password():
    with pytest.raises(ValidationError):
        SignUpRequest(**_signup(password="short", confirm_password="short"))


# --- Advisor registration ---

def test_registration_valid():
    reg = AdvisorRegistration(**_registration())
    assert reg.save_as_draft is False
    assert reg.professional_designations == []


def test_registration_bio_minimum_length():
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(personal_bio="too short"))


def test_registration_terms_must_be_accepted():
    with pytest.raises(ValidationError, match="accept the terms"):
        AdvisorRegistration(**_registration(terms_accepted=False))


def test_registration_requires_a_service_and_client_type():
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(advisor_services=[]))
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(client_type=[]))


def test_registration_rejects_unknown_vocabulary():
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(advisor_services=["Astrology"]))
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(state_hq="Atlantis"))


def test_registration_dedupes_multi_selects():
    reg = AdvisorRegistration(**_registration(advisor_services=["Tax Planning", "Tax Planning", "Estate Planning"]))
    assert [s.value for s in reg.advisor_services] == ["Tax Planning", "Estate Planning"]


def test_registration_blank_website_is_none():
    assert AdvisorRegistration(**_registration(website_url="  ")).website_url is None
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(website_url="not a url"))


def test_registration_experience_bounds():
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(years_of_experience=-1))
    with pytest.raises(ValidationError):
        AdvisorRegistration(**_registration(years_of_experience=81))


def test_reject_reason_cannot_be_blank():
    with pytest.raises(ValidationError, match="rejection reason is required"):
        AdvisorRejectRequest(rejection_reason="   ")
    assert AdvisorRejectRequest(rejection_reason="  Missing CRD  ").rejection_reason == "Missing CRD"


# --- Firms ---

def test_investment_firm_rating_bounds():
    with pytest.raises(ValidationError):
        InvestmentFirmCreate(name="X", rating=5.5)


def test_investment_firm_slug_pattern():
    with pytest.raises(ValidationError):
        InvestmentFirmCreate(name="X", slug="Not A Slug")
    assert InvestmentFirmCreate(name="X", slug="good-slug-2").slug == "good-slug-2"


def test_investment_firm_response_flattens_children():
    class _Feature:
        feature = "Monthly payouts"

    class _Client:
        client_type = "Students"

    class _Reg:
        registration = "SEC"

    class _Firm:
        id = uuid.uuid4()
        name = "Edly"
        slug = "edly"
        features = [_Feature()]
        clients = [_Client()]
        regulatory_info = [_Reg()]
        leadership = []
        money_making_methods = []
        asset_class = ["Loans"]
        created_at = updated_at = datetime(2024, 1, 1)

    data = InvestmentFirmResponse.model_validate(_Firm(), from_attributes=True)
    assert data.features == ["Monthly payouts"]
    assert data.clients == ["Students"]
    assert data.regulatory_info == ["SEC"]


# --- Meeting requests and newsletter ---

def test_meeting_request_requires_topic():
    with pytest.raises(ValidationError):
        MeetingRequestCreate(
            advisor_id=uuid.uuid4(), first_name="A", last_name="B", email="a@b.com",
            preferred_contact_method="email", interested_in_discussing=[],
        )


def test_meeting_request_strips_names():
    req = MeetingRequestCreate(
        advisor_id=uuid.uuid4(), first_name="  Ann ", last_name=" Lee", email="a@b.com",
        preferred_contact_method="phone", interested_in_discussing=["Tax Planning"],
    )
    assert (req.first_name, req.last_name) == ("Ann", "Lee")


def test_meeting_request_blank_name_rejected():
    with pytest.raises(ValidationError):
        MeetingRequestCreate(
            advisor_id=uuid.uuid4(), first_name="   ", last_name="Lee", email="a@b.com",
            preferred_contact_method="phone", interested_in_discussing=["Other"],
        )


def test_newsletter_strips_email():
    sub = NewsletterSubscribe(email="  reader@example.com ")
    assert str(sub.email) == "reader@example.com"


def test_newsletter_invalid_email():
    with pytest.raises(ValidationError):
        NewsletterSubscribe(email="not-an-email")


# --- Editor ---

def test_editor_request_unknown_action():
    with pytest.raises(ValidationError, match="Unknown action"):
        EditorFormatRequest(text="abc", selection_start=0, selection_end=1, action="strike")


def test_editor_request_selection_out_of_range():
    with pytest.raises(ValidationError):
        EditorFormatRequest(text="abc", selection_start=2, selection_end=1, action="bold")
    with pytest.raises(ValidationError):
        EditorFormatRequest(text="abc", selection_start=0, selection_end=10, action="bold")
