"""Meeting request intake and follow-up status."""
import logging
import uuid

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.advisor import AdvisorStatus
from app.models.audit_log import AuditAction, AuditLog
from app.models.meeting_request import MeetingRequest, MeetingRequestStatus
from app.models.user import User
from app.repositories import advisor_repository, meeting_request_repository
from app.schemas.meeting_request import MeetingRequestCreate, MeetingRequestFilter

logger = logging.getLogger(__name__)

TRANSITIONS: dict[str, set[str]] = {
    "pending": {"contacted", "cancelled"},
    "contacted": {"completed", "cancelled"},
}


def validate_transition(from_status: MeetingRequestStatus, to_status: MeetingRequestStatus) -> None:
    if to_status.value not in TRANSITIONS.get(from_status.value, set()):
        raise HTTPException(
            status_code=400,
            detail=f"Cannot move meeting request from '{from_status.value}' to '{to_status.value}'",
        )


async def create_request(db: AsyncSession, data: MeetingRequestCreate) -> MeetingRequest:
    advisor = await advisor_repository.get_by_id(db, data.advisor_id)
    if not advisor or advisor.status != AdvisorStatus.APPROVED:
        raise HTTPException(status_code=404, detail="Advisor not found")

    request = MeetingRequest(
        advisor_id=advisor.id,
        first_name=data.first_name,
        last_name=data.last_name,
        email=str(data.email).lower(),
        phone_number=data.phone_number,
        preferred_contact_method=data.preferred_contact_method,
        interested_in_discussing=[t.value for t in data.interested_in_discussing],
        message=data.message,
        status=MeetingRequestStatus.PENDING,
    )
    request = await meeting_request_repository.create(db, request)
    logger.info("Meeting request %s stored for advisor %s", request.id, advisor.id)
    return request


async def list_requests(db: AsyncSession, filters: MeetingRequestFilter) -> tuple[list[MeetingRequest], int]:
    return await meeting_request_repository.list_requests(
        db,
        advisor_id=filters.advisor_id,
        status=filters.status,
        skip=(filters.page - 1) * filters.per_page,
        limit=filters.per_page,
    )


async def list_for_owner(
    db: AsyncSession, user: User, page: int = 1, per_page: int = 20,
) -> tuple[list[MeetingRequest], int]:
    advisor = await advisor_repository.get_by_user(db, user.id)
    if not advisor:
        raise HTTPException(status_code=404, detail="Advisor profile not found")
    return await meeting_request_repository.list_requests(
        db, advisor_id=advisor.id, skip=(page - 1) * per_page, limit=per_page,
    )


async def change_status(
    db: AsyncSession, request_id: uuid.UUID, to_status: MeetingRequestStatus, user: User,
) -> MeetingRequest:
    request = await meeting_request_repository.get_by_id(db, request_id)
    if not request:
        raise HTTPException(status_code=404, detail="Meeting request not found")
    if not user.is_admin and (request.advisor is None or request.advisor.user_id != user.id):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    validate_transition(request.status, to_status)
    old_status = request.status
    request.status = to_status

    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.UPDATE,
        entity_type="meeting_request",
        entity_id=request.id,
        changes={"status": {"from": old_status.value, "to": to_status.value}},
    ))
    return await meeting_request_repository.update(db, request)
