"""Meeting request schemas."""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field, field_validator

from app.models.meeting_request import ContactMethod, MeetingRequestStatus
from app.models.taxonomy import DiscussionTopic
from app.schemas.advisor import _dedupe

Topics = Annotated[list[DiscussionTopic], AfterValidator(_dedupe)]


class MeetingRequestCreate(BaseModel):
    advisor_id: uuid.UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone_number: str | None = Field(None, max_length=50)
    preferred_contact_method: ContactMethod
    interested_in_discussing: Topics = Field(min_length=1)
    message: str | None = Field(None, max_length=5000)

    @field_validator("first_name", "last_name")
    @classmethod
    def _strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field is required")
        return v


class MeetingRequestStatusUpdate(BaseModel):
    status: MeetingRequestStatus


class MeetingRequestFilter(BaseModel):
    advisor_id: uuid.UUID | None = None
    status: MeetingRequestStatus | None = None
    page: int = 1
    per_page: int = 20


class MeetingRequestResponse(BaseModel):
    id: uuid.UUID
    advisor_id: uuid.UUID
    advisor_name: str | None = None
    advisor_firm_name: str | None = None
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    preferred_contact_method: ContactMethod
    interested_in_discussing: list[str]
    message: str | None = None
    status: MeetingRequestStatus
    created_at: datetime

    model_config = {"from_attributes": True}
