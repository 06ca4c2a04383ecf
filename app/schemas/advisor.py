"""Advisor request/response schemas."""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    field_validator,
)

from app.models.advisor import AdvisorStatus
from app.models.taxonomy import (
    ClienteleType,
    CompensationType,
    Designation,
    License,
    ServiceOffered,
    USState,
)
from app.schemas.common import reject_null

_http_url = TypeAdapter(HttpUrl)


def _dedupe(values: list) -> list:
    return list(dict.fromkeys(values))


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_url(value: str | None) -> str | None:
    if value is None:
        return None
    return str(_http_url.validate_python(value))


Bio = Annotated[str, Field(min_length=10, max_length=5000)]
OptionalUrl = Annotated[str | None, BeforeValidator(_blank_to_none), AfterValidator(_check_url)]
Services = Annotated[list[ServiceOffered], AfterValidator(_dedupe)]
Designations = Annotated[list[Designation], AfterValidator(_dedupe)]
Licenses = Annotated[list[License], AfterValidator(_dedupe)]
Compensations = Annotated[list[CompensationType], AfterValidator(_dedupe)]
ClientTypes = Annotated[list[ClienteleType], AfterValidator(_dedupe)]
States = Annotated[list[USState], AfterValidator(_dedupe)]


class AdvisorRegistration(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    firm_name: str = Field(min_length=1, max_length=255)
    position: str | None = Field(None, max_length=200)
    personal_bio: Bio
    firm_bio: Bio
    email: EmailStr
    phone_number: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    state_hq: USState | None = None
    years_of_experience: int = Field(ge=0, le=80)
    minimum: str | None = Field(None, max_length=100)
    website_url: OptionalUrl = None
    headshot_url: str | None = Field(None, max_length=500)
    fiduciary: bool = False
    first_session_is_free: bool = False
    advisor_services: Services = Field(min_length=1, max_length=10)
    professional_designations: Designations = Field(default_factory=list, max_length=10)
    licenses: Licenses = Field(default_factory=list, max_length=15)
    compensation: Compensations = Field(default_factory=list, max_length=6)
    client_type: ClientTypes = Field(min_length=1, max_length=10)
    states_registered_in: States = Field(default_factory=list, max_length=50)
    terms_accepted: bool
    save_as_draft: bool = False

    @field_validator("terms_accepted")
    @classmethod
    def _terms_must_be_accepted(cls, v: bool) -> bool:
        if not v:
            raise ValueError("You must accept the terms to register")
        return v


class AdvisorProfileUpdate(BaseModel):
    """Fields an advisor may change on their own record while it is not approved."""
    name: str | None = Field(None, min_length=1, max_length=200)
    firm_name: str | None = Field(None, min_length=1, max_length=255)
    position: str | None = Field(None, min_length=1, max_length=200)
    personal_bio: Bio | None = None
    firm_bio: Bio | None = None
    email: EmailStr | None = None
    phone_number: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    state_hq: USState | None = None
    years_of_experience: int | None = Field(None, ge=0, le=80)
    minimum: str | None = Field(None, max_length=100)
    website_url: OptionalUrl = None
    headshot_url: str | None = Field(None, max_length=500)
    firm_logo_url: str | None = Field(None, max_length=500)
    youtube_video_id: str | None = Field(None, max_length=50)
    scheduling_link: str | None = Field(None, max_length=500)
    primary_education: str | None = Field(None, max_length=255)
    secondary_education: str | None = Field(None, max_length=255)
    disclaimer: str | None = None
    firm_aum: str | None = Field(None, max_length=100)
    firm_address: str | None = Field(None, max_length=500)
    advisor_sec_crd: str | None = Field(None, max_length=50)
    firm_sec_crd: str | None = Field(None, max_length=50)
    fiduciary: bool | None = None
    first_session_is_free: bool | None = None
    advisor_services: Services | None = Field(None, min_length=1, max_length=10)
    professional_designations: Designations | None = Field(None, max_length=10)
    licenses: Licenses | None = Field(None, max_length=15)
    compensation: Compensations | None = Field(None, max_length=6)
    client_type: ClientTypes | None = Field(None, min_length=1, max_length=10)
    states_registered_in: States | None = Field(None, max_length=50)

    # omitted means unchanged; the registration requirements still hold
    _required = field_validator(
        "name", "firm_name", "personal_bio", "firm_bio", "email", "years_of_experience",
        "fiduciary", "first_session_is_free", "advisor_services", "professional_designations",
        "licenses", "compensation", "client_type", "states_registered_in",
        mode="before",
    )(reject_null)


class AdvisorAdminUpdate(AdvisorProfileUpdate):
    verified: bool | None = None
    premium: bool | None = None
    rating: float | None = Field(None, ge=0, le=5)
    calls_booked: int | None = Field(None, ge=0)

    _admin_required = field_validator("verified", "premium", "calls_booked", mode="before")(reject_null)


class AdvisorRejectRequest(BaseModel):
    rejection_reason: str = Field(max_length=2000)

    @field_validator("rejection_reason")
    @classmethod
    def _reason_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("A rejection reason is required")
        return v


class AdvisorApproveRequest(BaseModel):
    comment: str | None = Field(None, max_length=2000)


class AdvisorFilter(BaseModel):
    search: str | None = None
    state: str | None = None
    specialties: list[str] = Field(default_factory=list)
    client_type: str | None = None
    minimum_assets: int | None = None
    page: int = 1
    per_page: int = 15


class AdvisorAdminFilter(BaseModel):
    status: AdvisorStatus | None = None
    search: str | None = None
    page: int = 1
    per_page: int = 20


class AdvisorSummary(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    firm_name: str | None = None
    position: str | None = None
    city: str | None = None
    state_hq: str | None = None
    headshot_url: str | None = None
    minimum: str | None = None
    years_of_experience: int | None = None
    advisor_services: list[str] = []
    professional_designations: list[str] = []
    client_type: list[str] = []
    fiduciary: bool = False
    first_session_is_free: bool = False
    verified: bool = False
    premium: bool = False
    rating: float | None = None

    model_config = {"from_attributes": True}


class AdvisorResponse(AdvisorSummary):
    personal_bio: str | None = None
    firm_bio: str | None = None
    email: str | None = None
    phone_number: str | None = None
    minimum_amount: float | None = None
    firm_logo_url: str | None = None
    website_url: str | None = None
    youtube_video_id: str | None = None
    scheduling_link: str | None = None
    primary_education: str | None = None
    secondary_education: str | None = None
    disclaimer: str | None = None
    firm_aum: str | None = None
    firm_address: str | None = None
    advisor_sec_crd: str | None = None
    firm_sec_crd: str | None = None
    licenses: list[str] = []
    compensation: list[str] = []
    states_registered_in: list[str] = []
    status: AdvisorStatus
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    approved_by: uuid.UUID | None = None
    rejection_reason: str | None = None
    calls_booked: int = 0
    user_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class AdvisorApprovalResponse(BaseModel):
    id: uuid.UUID
    advisor_id: uuid.UUID
    from_status: AdvisorStatus
    to_status: AdvisorStatus
    reviewer_id: uuid.UUID | None = None
    comment: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
