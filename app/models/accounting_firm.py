"""Accounting firm ORM model."""
from sqlalchemy import Boolean, Float, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, StringArray, TimestampMixin, UUIDMixin


class AccountingFirm(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "accounting_firms"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    headquarters: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    large_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    small_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    minimum_fee: Mapped[str | None] = mapped_column(String(100), nullable=True)
    minimum_fee_amount: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    established: Mapped[str | None] = mapped_column(String(50), nullable=True)
    employees: Mapped[str | None] = mapped_column(String(50), nullable=True)
    services: Mapped[list[str]] = mapped_column(StringArray, default=list)
    specialties: Mapped[list[str]] = mapped_column(StringArray, default=list)
    industries: Mapped[list[str]] = mapped_column(StringArray, default=list)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    premium: Mapped[bool] = mapped_column(Boolean, default=False)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review_count: Mapped[int] = mapped_column(Integer, default=0)
