"""Investment and accounting firm data access layer."""
import uuid as _uuid

from sqlalchemy import and_, func, or_, select
from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.accounting_firm import AccountingFirm
from app.models.base import array_overlap
from app.models.investment_firm import InvestmentFirm, SimilarFirm

# bucket -> (lower bound inclusive, upper bound exclusive); None = open
INVESTMENT_MINIMUM_RANGES: dict[str, tuple[float | None, float | None]] = {
    "under_250k": (None, 250_000),
    "250k_500k": (250_000, 500_000),
    "500k_1m": (500_000, 1_000_000),
    "1m_5m": (1_000_000, 5_000_000),
    "5m_plus": (5_000_000, None),
}


def _no_minimum(column):
    return or_(column.is_(None), column == 0)


def investment_minimum_condition(bucket: str):
    if bucket == "no_minimum":
        return _no_minimum(InvestmentFirm.minimum_investment)
    low, high = INVESTMENT_MINIMUM_RANGES[bucket]
    column = InvestmentFirm.minimum_investment
    parts = [column > 0]
    if low is not None:
        parts.append(column >= low)
    if high is not None:
        parts.append(column < high)
    return and_(*parts)


def accounting_fee_condition(bucket: str):
    column = AccountingFirm.minimum_fee_amount
    if bucket == "no_minimum":
        return _no_minimum(column)
    if bucket == "under_250":
        return and_(column > 0, column < 250)
    return column >= 250


# --- Investment firms ---

async def get_investment_firm(db: AsyncSession, firm_id: _uuid.UUID) -> InvestmentFirm | None:
    return (await db.execute(select(InvestmentFirm).where(InvestmentFirm.id == firm_id))).scalar_one_or_none()


async def get_investment_firm_by_slug(db: AsyncSession, slug: str) -> InvestmentFirm | None:
    return (await db.execute(select(InvestmentFirm).where(InvestmentFirm.slug == slug))).scalar_one_or_none()


async def investment_slug_exists(db: AsyncSession, slug: str) -> bool:
    q = select(func.count()).select_from(InvestmentFirm).where(InvestmentFirm.slug == slug)
    return ((await db.execute(q)).scalar() or 0) > 0


async def list_investment_firms(
    db: AsyncSession,
    *,
    search: str | None = None,
    state: str | None = None,
    asset_class: str | None = None,
    minimum: str | None = None,
    skip: int = 0,
    limit: int = 12,
) -> tuple[list[InvestmentFirm], int]:
    conditions = []
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(InvestmentFirm.name.ilike(pattern), InvestmentFirm.headquarters.ilike(pattern)))
    if state:
        conditions.append(InvestmentFirm.headquarters == state)
    if asset_class:
        conditions.append(array_overlap(InvestmentFirm.asset_class, [asset_class]))
    if minimum:
        conditions.append(investment_minimum_condition(minimum))

    q = select(InvestmentFirm).where(*conditions)
    count_q = select(func.count()).select_from(InvestmentFirm).where(*conditions)

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(q.order_by(InvestmentFirm.name.asc()).offset(skip).limit(limit))).scalars().all()
    return list(rows), total


async def list_all_investment_firms(db: AsyncSession) -> list[InvestmentFirm]:
    return list((await db.execute(select(InvestmentFirm).order_by(InvestmentFirm.name))).scalars().all())


async def list_headquarters(db: AsyncSession) -> list[str]:
    q = (
        select(InvestmentFirm.headquarters)
        .where(InvestmentFirm.headquarters.is_not(None))
        .distinct()
        .order_by(InvestmentFirm.headquarters)
    )
    return list((await db.execute(q)).scalars().all())


async def list_similar_firms(db: AsyncSession, firm_id: _uuid.UUID) -> list[InvestmentFirm]:
    q = (
        select(InvestmentFirm)
        .join(SimilarFirm, SimilarFirm.similar_firm_id == InvestmentFirm.id)
        .where(SimilarFirm.firm_id == firm_id)
        .order_by(InvestmentFirm.name)
    )
    return list((await db.execute(q)).scalars().all())


async def replace_similar_firms(db: AsyncSession, firm_id: _uuid.UUID, similar_ids: list[_uuid.UUID]) -> None:
    await db.execute(sa_delete(SimilarFirm).where(SimilarFirm.firm_id == firm_id))
    for similar_id in similar_ids:
        db.add(SimilarFirm(firm_id=firm_id, similar_firm_id=similar_id))
    await db.flush()


async def count_investment_firms(db: AsyncSession, firm_ids: list[_uuid.UUID]) -> int:
    if not firm_ids:
        return 0
    q = select(func.count()).select_from(InvestmentFirm).where(InvestmentFirm.id.in_(firm_ids))
    return (await db.execute(q)).scalar() or 0


async def delete_investment_firm(db: AsyncSession, firm: InvestmentFirm) -> None:
    await db.execute(sa_delete(SimilarFirm).where(
        or_(SimilarFirm.firm_id == firm.id, SimilarFirm.similar_firm_id == firm.id)
    ))
    await db.delete(firm)
    await db.flush()


# --- Accounting firms ---

async def get_accounting_firm(db: AsyncSession, firm_id: _uuid.UUID) -> AccountingFirm | None:
    return (await db.execute(select(AccountingFirm).where(AccountingFirm.id == firm_id))).scalar_one_or_none()


async def get_accounting_firm_by_slug(db: AsyncSession, slug: str) -> AccountingFirm | None:
    return (await db.execute(select(AccountingFirm).where(AccountingFirm.slug == slug))).scalar_one_or_none()


async def accounting_slug_exists(db: AsyncSession, slug: str) -> bool:
    q = select(func.count()).select_from(AccountingFirm).where(AccountingFirm.slug == slug)
    return ((await db.execute(q)).scalar() or 0) > 0


async def list_accounting_firms(
    db: AsyncSession,
    *,
    search: str | None = None,
    specialty: str | None = None,
    service: str | None = None,
    fee: str | None = None,
    skip: int = 0,
    limit: int = 12,
) -> tuple[list[AccountingFirm], int]:
    conditions = []
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(AccountingFirm.name.ilike(pattern), AccountingFirm.description.ilike(pattern)))
    if specialty:
        conditions.append(array_overlap(AccountingFirm.specialties, [specialty]))
    if service:
        conditions.append(array_overlap(AccountingFirm.services, [service]))
    if fee:
        conditions.append(accounting_fee_condition(fee))

    q = select(AccountingFirm).where(*conditions)
    count_q = select(func.count()).select_from(AccountingFirm).where(*conditions)

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(q.order_by(AccountingFirm.name.asc()).offset(skip).limit(limit))).scalars().all()
    return list(rows), total


async def list_all_accounting_firms(db: AsyncSession) -> list[AccountingFirm]:
    return list((await db.execute(select(AccountingFirm).order_by(AccountingFirm.name))).scalars().all())


# --- Shared ---

async def create(db: AsyncSession, firm: InvestmentFirm | AccountingFirm):
    db.add(firm)
    await db.flush()
    await db.refresh(firm)
    return firm


async def update(db: AsyncSession, firm: InvestmentFirm | AccountingFirm):
    await db.flush()
    await db.refresh(firm)
    return firm


async def delete(db: AsyncSession, firm: AccountingFirm) -> None:
    await db.delete(firm)
    await db.flush()
