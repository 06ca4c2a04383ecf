"""Investment firm ORM models and their child collections."""
import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, StringArray, TimestampMixin, UUIDMixin, pg_enum
from app.models.taxonomy import PayoutFrequency, WithdrawalType


class InvestmentFirm(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "investment_firms"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    headquarters: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    firm_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    app_store_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    play_store_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    large_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    small_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    video_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    established: Mapped[date | None] = mapped_column(Date, nullable=True)
    aum: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fees: Mapped[str | None] = mapped_column(String(255), nullable=True)
    minimum_investment: Mapped[float | None] = mapped_column(Numeric(16, 2, asdecimal=False), nullable=True)
    target_return: Mapped[str | None] = mapped_column(String(100), nullable=True)
    payout: Mapped[PayoutFrequency | None] = mapped_column(
        pg_enum(PayoutFrequency, name="payout_frequency"), nullable=True
    )
    withdrawal_type: Mapped[WithdrawalType | None] = mapped_column(
        pg_enum(WithdrawalType, name="withdrawal_type"), nullable=True
    )
    investment_risks: Mapped[str | None] = mapped_column(Text, nullable=True)
    liquidity: Mapped[str | None] = mapped_column(Text, nullable=True)
    how_company_makes_money: Mapped[str | None] = mapped_column(Text, nullable=True)
    how_you_make_money: Mapped[str | None] = mapped_column(Text, nullable=True)
    asset_class: Mapped[list[str]] = mapped_column(StringArray, default=list)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review_count: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    features = relationship(
        "InvestmentFirmFeature", lazy="selectin", cascade="all, delete-orphan", passive_deletes=True,
    )
    leadership = relationship(
        "InvestmentFirmLeader", lazy="selectin", cascade="all, delete-orphan", passive_deletes=True,
    )
    money_making_methods = relationship(
        "MoneyMakingMethod", lazy="selectin", cascade="all, delete-orphan", passive_deletes=True,
    )
    clients = relationship(
        "InvestmentFirmClient", lazy="selectin", cascade="all, delete-orphan", passive_deletes=True,
    )
    regulatory_info = relationship(
        "InvestmentFirmRegulatoryInfo", lazy="selectin", cascade="all, delete-orphan", passive_deletes=True,
    )


def _firm_fk() -> Mapped[uuid.UUID]:
    return mapped_column(
        UUID(as_uuid=True), ForeignKey("investment_firms.id", ondelete="CASCADE"), nullable=False, index=True
    )


class InvestmentFirmFeature(Base, UUIDMixin):
    __tablename__ = "investment_firm_features"

    firm_id: Mapped[uuid.UUID] = _firm_fk()
    feature: Mapped[str] = mapped_column(String(255), nullable=False)


class InvestmentFirmLeader(Base, UUIDMixin):
    __tablename__ = "investment_firm_leadership"

    firm_id: Mapped[uuid.UUID] = _firm_fk()
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[str | None] = mapped_column(String(200), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)


class MoneyMakingMethod(Base, UUIDMixin):
    __tablename__ = "money_making_methods"

    firm_id: Mapped[uuid.UUID] = _firm_fk()
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class InvestmentFirmClient(Base, UUIDMixin):
    __tablename__ = "investment_firm_clients"

    firm_id: Mapped[uuid.UUID] = _firm_fk()
    client_type: Mapped[str] = mapped_column(String(200), nullable=False)


class InvestmentFirmRegulatoryInfo(Base, UUIDMixin):
    __tablename__ = "investment_firm_regulatory_info"

    firm_id: Mapped[uuid.UUID] = _firm_fk()
    registration: Mapped[str] = mapped_column(String(255), nullable=False)


class SimilarFirm(Base):
    """Directed "see also" link between two investment firms."""

    __tablename__ = "similar_firms"

    firm_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("investment_firms.id", ondelete="CASCADE"), primary_key=True
    )
    similar_firm_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("investment_firms.id", ondelete="CASCADE"), primary_key=True
    )
