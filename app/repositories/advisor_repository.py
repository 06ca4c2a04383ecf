"""Advisor data access layer."""
import uuid as _uuid

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.advisor import Advisor, AdvisorApproval, AdvisorStatus
from app.models.base import array_overlap
from app.models.meeting_request import MeetingRequest


async def get_by_id(db: AsyncSession, advisor_id: _uuid.UUID) -> Advisor | None:
    return (await db.execute(select(Advisor).where(Advisor.id == advisor_id))).scalar_one_or_none()


async def get_by_slug(
    db: AsyncSession, slug: str, *, status: AdvisorStatus | None = None
) -> Advisor | None:
    q = select(Advisor).where(Advisor.slug == slug)
    if status:
        q = q.where(Advisor.status == status)
    return (await db.execute(q)).scalar_one_or_none()


async def get_by_user(db: AsyncSession, user_id: _uuid.UUID) -> Advisor | None:
    return (await db.execute(select(Advisor).where(Advisor.user_id == user_id))).scalar_one_or_none()


async def slug_exists(db: AsyncSession, slug: str) -> bool:
    q = select(func.count()).select_from(Advisor).where(Advisor.slug == slug)
    return ((await db.execute(q)).scalar() or 0) > 0


async def list_public(
    db: AsyncSession,
    *,
    search: str | None = None,
    state: str | None = None,
    specialties: list[str] | None = None,
    client_type: str | None = None,
    minimum_assets: int | None = None,
    skip: int = 0,
    limit: int = 15,
) -> tuple[list[Advisor], int]:
    """Approved advisors matching every supplied filter, premium first."""
    conditions = [Advisor.status == AdvisorStatus.APPROVED]
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(Advisor.name.ilike(pattern), Advisor.firm_name.ilike(pattern)))
    if state:
        conditions.append(Advisor.state_hq == state)
    if specialties:
        conditions.append(array_overlap(Advisor.advisor_services, specialties))
    if client_type:
        conditions.append(array_overlap(Advisor.client_type, [client_type]))
    if minimum_assets is not None:
        # no stated minimum always qualifies
        conditions.append(or_(
            Advisor.minimum_amount.is_(None),
            Advisor.minimum_amount == 0,
            Advisor.minimum_amount <= minimum_assets,
        ))

    q = select(Advisor).where(*conditions)
    count_q = select(func.count()).select_from(Advisor).where(*conditions)

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(
        q.order_by(Advisor.premium.desc(), Advisor.name.asc()).offset(skip).limit(limit)
    )).scalars().all()
    return list(rows), total


async def list_approved(db: AsyncSession) -> list[Advisor]:
    q = select(Advisor).where(Advisor.status == AdvisorStatus.APPROVED).order_by(Advisor.name.asc())
    return list((await db.execute(q)).scalars().all())


async def list_admin(
    db: AsyncSession,
    *,
    status: AdvisorStatus | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Advisor], int]:
    q = select(Advisor)
    count_q = select(func.count()).select_from(Advisor)

    if status:
        q = q.where(Advisor.status == status)
        count_q = count_q.where(Advisor.status == status)
    if search:
        pattern = f"%{search}%"
        cond = or_(Advisor.name.ilike(pattern), Advisor.firm_name.ilike(pattern), Advisor.email.ilike(pattern))
        q = q.where(cond)
        count_q = count_q.where(cond)

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(q.offset(skip).limit(limit).order_by(Advisor.created_at.desc()))).scalars().all()
    return list(rows), total


async def list_states(db: AsyncSession) -> list[str]:
    q = (
        select(Advisor.state_hq)
        .where(Advisor.status == AdvisorStatus.APPROVED, Advisor.state_hq.is_not(None))
        .distinct()
        .order_by(Advisor.state_hq)
    )
    return list((await db.execute(q)).scalars().all())


async def list_approvals(db: AsyncSession, advisor_id: _uuid.UUID) -> list[AdvisorApproval]:
    q = (
        select(AdvisorApproval)
        .where(AdvisorApproval.advisor_id == advisor_id)
        .order_by(AdvisorApproval.created_at.asc())
    )
    return list((await db.execute(q)).scalars().all())


async def create(db: AsyncSession, advisor: Advisor) -> Advisor:
    db.add(advisor)
    await db.flush()
    await db.refresh(advisor)
    return advisor


async def update(db: AsyncSession, advisor: Advisor) -> Advisor:
    await db.flush()
    await db.refresh(advisor)
    return advisor


async def add_approval(db: AsyncSession, approval: AdvisorApproval) -> AdvisorApproval:
    db.add(approval)
    await db.flush()
    return approval


async def delete(db: AsyncSession, advisor: Advisor) -> None:
    await db.execute(sa_delete(MeetingRequest).where(MeetingRequest.advisor_id == advisor.id))
    await db.execute(sa_delete(AdvisorApproval).where(AdvisorApproval.advisor_id == advisor.id))
    await db.delete(advisor)
    await db.flush()
