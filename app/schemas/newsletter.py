"""Newsletter schemas."""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, EmailStr, Field


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class NewsletterSubscribe(BaseModel):
    name: Annotated[str | None, BeforeValidator(_strip)] = Field(None, max_length=200)
    email: Annotated[EmailStr, BeforeValidator(_strip)]


class NewsletterSignupResponse(BaseModel):
    id: uuid.UUID
    name: str | None = None
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}
