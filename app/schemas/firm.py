"""Investment and accounting firm request/response schemas."""
import enum
import uuid
from datetime import date, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, field_validator

from app.models.taxonomy import (
    AccountingService,
    AssetClass,
    ClientSpecialty,
    PayoutFrequency,
    WithdrawalType,
)
from app.schemas.advisor import OptionalUrl, _dedupe
from app.schemas.common import reject_null

AssetClasses = Annotated[list[AssetClass], AfterValidator(_dedupe)]
AccountingServices = Annotated[list[AccountingService], AfterValidator(_dedupe)]
ClientSpecialties = Annotated[list[ClientSpecialty], AfterValidator(_dedupe)]


def _attr_values(attr: str):
    def pick(items):
        return [getattr(item, attr, item) for item in items or []]
    return pick


FeatureList = Annotated[list[str], BeforeValidator(_attr_values("feature"))]
ClientList = Annotated[list[str], BeforeValidator(_attr_values("client_type"))]
RegistrationList = Annotated[list[str], BeforeValidator(_attr_values("registration"))]


class MinimumInvestmentBucket(str, enum.Enum):
    NO_MINIMUM = "no_minimum"
    UNDER_250K = "under_250k"
    FROM_250K_TO_500K = "250k_500k"
    FROM_500K_TO_1M = "500k_1m"
    FROM_1M_TO_5M = "1m_5m"
    OVER_5M = "5m_plus"


class MinimumFeeBucket(str, enum.Enum):
    NO_MINIMUM = "no_minimum"
    UNDER_250 = "under_250"
    FROM_250 = "250_plus"


# --- Investment firm children ---

class LeaderIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    position: str | None = Field(None, max_length=200)
    bio: str | None = None
    avatar_url: str | None = Field(None, max_length=500)


class MoneyMakingMethodIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None


class LeaderResponse(LeaderIn):
    id: uuid.UUID

    model_config = {"from_attributes": True}


class MoneyMakingMethodResponse(MoneyMakingMethodIn):
    id: uuid.UUID

    model_config = {"from_attributes": True}


# --- Investment firms ---

class InvestmentFirmCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: str | None = None
    long_description: str | None = None
    address: str | None = Field(None, max_length=500)
    headquarters: str | None = Field(None, max_length=100)
    website: OptionalUrl = None
    firm_link: OptionalUrl = None
    app_store_link: OptionalUrl = None
    play_store_link: OptionalUrl = None
    logo_url: str | None = Field(None, max_length=500)
    large_image_url: str | None = Field(None, max_length=500)
    small_image_url: str | None = Field(None, max_length=500)
    video_url: str | None = Field(None, max_length=500)
    video_title: str | None = Field(None, max_length=255)
    established: date | None = None
    aum: str | None = Field(None, max_length=100)
    fees: str | None = Field(None, max_length=255)
    minimum_investment: float | None = Field(None, ge=0)
    target_return: str | None = Field(None, max_length=100)
    payout: PayoutFrequency | None = None
    withdrawal_type: WithdrawalType | None = None
    investment_risks: str | None = None
    liquidity: str | None = None
    how_company_makes_money: str | None = None
    how_you_make_money: str | None = None
    asset_class: AssetClasses = Field(default_factory=list)
    verified: bool = False
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    features: list[str] = Field(default_factory=list)
    leadership: list[LeaderIn] = Field(default_factory=list)
    money_making_methods: list[MoneyMakingMethodIn] = Field(default_factory=list)
    clients: list[str] = Field(default_factory=list)
    regulatory_info: list[str] = Field(default_factory=list)


class InvestmentFirmUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: str | None = None
    long_description: str | None = None
    address: str | None = Field(None, max_length=500)
    headquarters: str | None = Field(None, max_length=100)
    website: OptionalUrl = None
    firm_link: OptionalUrl = None
    app_store_link: OptionalUrl = None
    play_store_link: OptionalUrl = None
    logo_url: str | None = Field(None, max_length=500)
    large_image_url: str | None = Field(None, max_length=500)
    small_image_url: str | None = Field(None, max_length=500)
    video_url: str | None = Field(None, max_length=500)
    video_title: str | None = Field(None, max_length=255)
    established: date | None = None
    aum: str | None = Field(None, max_length=100)
    fees: str | None = Field(None, max_length=255)
    minimum_investment: float | None = Field(None, ge=0)
    target_return: str | None = Field(None, max_length=100)
    payout: PayoutFrequency | None = None
    withdrawal_type: WithdrawalType | None = None
    investment_risks: str | None = None
    liquidity: str | None = None
    how_company_makes_money: str | None = None
    how_you_make_money: str | None = None
    asset_class: AssetClasses | None = None
    verified: bool | None = None
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)
    features: list[str] | None = None
    leadership: list[LeaderIn] | None = None
    money_making_methods: list[MoneyMakingMethodIn] | None = None
    clients: list[str] | None = None
    regulatory_info: list[str] | None = None

    _required = field_validator("name", "asset_class", "verified", "review_count", mode="before")(reject_null)


class SimilarFirmsUpdate(BaseModel):
    firm_ids: list[uuid.UUID] = Field(default_factory=list, max_length=20)


class InvestmentFirmFilter(BaseModel):
    search: str | None = None
    state: str | None = None
    asset_class: AssetClass | None = None
    minimum: MinimumInvestmentBucket | None = None
    page: int = 1
    per_page: int = 12


class InvestmentFirmSummary(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    headquarters: str | None = None
    logo_url: str | None = None
    small_image_url: str | None = None
    aum: str | None = None
    minimum_investment: float | None = None
    target_return: str | None = None
    asset_class: list[str] = []
    verified: bool = False
    rating: float | None = None
    review_count: int = 0

    model_config = {"from_attributes": True}


class InvestmentFirmResponse(InvestmentFirmSummary):
    long_description: str | None = None
    address: str | None = None
    website: str | None = None
    firm_link: str | None = None
    app_store_link: str | None = None
    play_store_link: str | None = None
    large_image_url: str | None = None
    video_url: str | None = None
    video_title: str | None = None
    established: date | None = None
    fees: str | None = None
    payout: PayoutFrequency | None = None
    withdrawal_type: WithdrawalType | None = None
    investment_risks: str | None = None
    liquidity: str | None = None
    how_company_makes_money: str | None = None
    how_you_make_money: str | None = None
    features: FeatureList = []
    leadership: list[LeaderResponse] = []
    money_making_methods: list[MoneyMakingMethodResponse] = []
    clients: ClientList = []
    regulatory_info: RegistrationList = []
    created_at: datetime
    updated_at: datetime


# --- Accounting firms ---

class AccountingFirmCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: str | None = None
    long_description: str | None = None
    address: str | None = Field(None, max_length=500)
    headquarters: str | None = Field(None, max_length=100)
    website: OptionalUrl = None
    logo_url: str | None = Field(None, max_length=500)
    large_image_url: str | None = Field(None, max_length=500)
    small_image_url: str | None = Field(None, max_length=500)
    video_url: str | None = Field(None, max_length=500)
    video_title: str | None = Field(None, max_length=255)
    minimum_fee: str | None = Field(None, max_length=100)
    established: str | None = Field(None, max_length=50)
    employees: str | None = Field(None, max_length=50)
    services: AccountingServices = Field(default_factory=list)
    specialties: ClientSpecialties = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list, max_length=50)
    verified: bool = False
    premium: bool = False
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int = Field(0, ge=0)


class AccountingFirmUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: str | None = None
    long_description: str | None = None
    address: str | None = Field(None, max_length=500)
    headquarters: str | None = Field(None, max_length=100)
    website: OptionalUrl = None
    logo_url: str | None = Field(None, max_length=500)
    large_image_url: str | None = Field(None, max_length=500)
    small_image_url: str | None = Field(None, max_length=500)
    video_url: str | None = Field(None, max_length=500)
    video_title: str | None = Field(None, max_length=255)
    minimum_fee: str | None = Field(None, max_length=100)
    established: str | None = Field(None, max_length=50)
    employees: str | None = Field(None, max_length=50)
    services: AccountingServices | None = None
    specialties: ClientSpecialties | None = None
    industries: list[str] | None = Field(None, max_length=50)
    verified: bool | None = None
    premium: bool | None = None
    rating: float | None = Field(None, ge=0, le=5)
    review_count: int | None = Field(None, ge=0)

    _required = field_validator(
        "name", "services", "specialties", "industries", "verified", "premium", "review_count",
        mode="before",
    )(reject_null)


class AccountingFirmFilter(BaseModel):
    search: str | None = None
    specialty: ClientSpecialty | None = None
    service: AccountingService | None = None
    fee: MinimumFeeBucket | None = None
    page: int = 1
    per_page: int = 12


class AccountingFirmSummary(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    headquarters: str | None = None
    logo_url: str | None = None
    small_image_url: str | None = None
    minimum_fee: str | None = None
    services: list[str] = []
    specialties: list[str] = []
    verified: bool = False
    premium: bool = False
    rating: float | None = None
    review_count: int = 0

    model_config = {"from_attributes": True}


class AccountingFirmResponse(AccountingFirmSummary):
    long_description: str | None = None
    address: str | None = None
    website: str | None = None
    large_image_url: str | None = None
    video_url: str | None = None
    video_title: str | None = None
    minimum_fee_amount: float | None = None
    established: str | None = None
    employees: str | None = None
    industries: list[str] = []
    created_at: datetime
    updated_at: datetime
