"""Auth and profile request/response schemas."""
import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from app.models.taxonomy import ProfessionalType


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    confirm_password: str
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    professional_type: ProfessionalType = ProfessionalType.FINANCIAL_ADVISOR
    agree_to_terms: bool

    @model_validator(mode="after")
    def _check_terms_and_passwords(self) -> "SignUpRequest":
        if not self.agree_to_terms:
            raise ValueError("You must agree to the terms and conditions")
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = 1800


class RefreshRequest(BaseModel):
    refresh_token: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str = Field(min_length=8, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def _check_passwords(self) -> "ResetPasswordRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ProfileUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    professional_type: ProfessionalType | None = None


class AdminFlagUpdate(BaseModel):
    is_admin: bool


class ProfileResponse(BaseModel):
    id: uuid.UUID
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    professional_type: ProfessionalType | None = None
    is_admin: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserInfo(BaseModel):
    id: uuid.UUID
    email: str
    is_active: bool
    is_admin: bool
    last_login_at: datetime | None = None
    profile: ProfileResponse | None = None

    model_config = {"from_attributes": True}


class ProfileFilter(BaseModel):
    search: str | None = None
    is_admin: bool | None = None
    page: int = 1
    per_page: int = 20
