"""Meeting request data access layer."""
import uuid as _uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.meeting_request import MeetingRequest, MeetingRequestStatus


async def get_by_id(db: AsyncSession, request_id: _uuid.UUID) -> MeetingRequest | None:
    return (await db.execute(select(MeetingRequest).where(MeetingRequest.id == request_id))).scalar_one_or_none()


async def list_requests(
    db: AsyncSession,
    *,
    advisor_id: _uuid.UUID | None = None,
    status: MeetingRequestStatus | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[MeetingRequest], int]:
    q = select(MeetingRequest)
    count_q = select(func.count()).select_from(MeetingRequest)

    if advisor_id:
        q = q.where(MeetingRequest.advisor_id == advisor_id)
        count_q = count_q.where(MeetingRequest.advisor_id == advisor_id)
    if status:
        q = q.where(MeetingRequest.status == status)
        count_q = count_q.where(MeetingRequest.status == status)

    total = (await db.execute(count_q)).scalar() or 0
    rows = (await db.execute(q.offset(skip).limit(limit).order_by(MeetingRequest.created_at.desc()))).scalars().all()
    return list(rows), total


async def create(db: AsyncSession, request: MeetingRequest) -> MeetingRequest:
    db.add(request)
    await db.flush()
    await db.refresh(request)
    return request


async def update(db: AsyncSession, request: MeetingRequest) -> MeetingRequest:
    await db.flush()
    await db.refresh(request)
    return request
