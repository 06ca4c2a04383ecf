"""Financial advisor ORM model."""
import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, StringArray, TimestampMixin, UUIDMixin, pg_enum


class AdvisorStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


class Advisor(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "financial_advisors"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    firm_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(200), nullable=True)
    personal_bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    firm_bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state_hq: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    years_of_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    minimum: Mapped[str | None] = mapped_column(String(100), nullable=True)
    minimum_amount: Mapped[float | None] = mapped_column(Numeric(16, 2, asdecimal=False), nullable=True)

    headshot_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    firm_logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    youtube_video_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheduling_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    primary_education: Mapped[str | None] = mapped_column(String(255), nullable=True)
    secondary_education: Mapped[str | None] = mapped_column(String(255), nullable=True)
    disclaimer: Mapped[str | None] = mapped_column(Text, nullable=True)
    firm_aum: Mapped[str | None] = mapped_column(String(100), nullable=True)
    firm_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    advisor_sec_crd: Mapped[str | None] = mapped_column(String(50), nullable=True)
    firm_sec_crd: Mapped[str | None] = mapped_column(String(50), nullable=True)
    fiduciary: Mapped[bool] = mapped_column(Boolean, default=False)
    first_session_is_free: Mapped[bool] = mapped_column(Boolean, default=False)

    advisor_services: Mapped[list[str]] = mapped_column(StringArray, default=list)
    professional_designations: Mapped[list[str]] = mapped_column(StringArray, default=list)
    licenses: Mapped[list[str]] = mapped_column(StringArray, default=list)
    compensation: Mapped[list[str]] = mapped_column(StringArray, default=list)
    client_type: Mapped[list[str]] = mapped_column(StringArray, default=list)
    states_registered_in: Mapped[list[str]] = mapped_column(StringArray, default=list)

    status: Mapped[AdvisorStatus] = mapped_column(
        pg_enum(AdvisorStatus, name="advisor_status"), nullable=False, default=AdvisorStatus.DRAFT
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    premium: Mapped[bool] = mapped_column(Boolean, default=False)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    calls_booked: Mapped[int] = mapped_column(Integer, default=0)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True
    )

    # Relationships
    approvals = relationship(
        "AdvisorApproval", back_populates="advisor", lazy="noload", passive_deletes=True,
    )
    meeting_requests = relationship(
        "MeetingRequest", back_populates="advisor", lazy="noload", passive_deletes=True,
    )


class AdvisorApproval(Base, UUIDMixin, TimestampMixin):
    """One row per advisor status change."""

    __tablename__ = "advisor_approvals"

    advisor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("financial_advisors.id", ondelete="CASCADE"), nullable=False
    )
    from_status: Mapped[AdvisorStatus] = mapped_column(
        pg_enum(AdvisorStatus, name="advisor_status", create_type=False), nullable=False
    )
    to_status: Mapped[AdvisorStatus] = mapped_column(
        pg_enum(AdvisorStatus, name="advisor_status", create_type=False), nullable=False
    )
    reviewer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    advisor = relationship("Advisor", back_populates="approvals")
