"""Newsletter signup ORM model."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class NewsletterSignup(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "newsletter_signups"

    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
