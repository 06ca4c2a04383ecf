"""Meeting request ORM model."""
import enum
import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, StringArray, TimestampMixin, UUIDMixin, pg_enum


class ContactMethod(str, enum.Enum):
    EMAIL = "email"
    PHONE = "phone"


class MeetingRequestStatus(str, enum.Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MeetingRequest(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "meeting_requests"

    advisor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("financial_advisors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    preferred_contact_method: Mapped[ContactMethod] = mapped_column(
        pg_enum(ContactMethod, name="contact_method"), nullable=False
    )
    interested_in_discussing: Mapped[list[str]] = mapped_column(StringArray, nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[MeetingRequestStatus] = mapped_column(
        pg_enum(MeetingRequestStatus, name="meeting_request_status"),
        nullable=False,
        default=MeetingRequestStatus.PENDING,
    )

    # Relationships
    advisor = relationship("Advisor", back_populates="meeting_requests", lazy="joined")

    @property
    def advisor_name(self) -> str | None:
        return self.advisor.name if self.advisor is not None else None

    @property
    def advisor_firm_name(self) -> str | None:
        return self.advisor.firm_name if self.advisor is not None else None
