"""Meeting requests API - public intake, admin and advisor follow-up."""
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_current_user, get_db, require_admin
from app.models.meeting_request import MeetingRequestStatus
from app.models.user import User
from app.schemas.common import APIResponse, PaginationMeta
from app.schemas.meeting_request import (
    MeetingRequestCreate,
    MeetingRequestFilter,
    MeetingRequestResponse,
    MeetingRequestStatusUpdate,
)
from app.services import meeting_request_service

router = APIRouter()


# POST /meeting-requests - public
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_meeting_request(body: MeetingRequestCreate, db: AsyncSession = Depends(get_db)):
    request = await meeting_request_service.create_request(db, body)
    return APIResponse(
        status="success",
        data=MeetingRequestResponse.model_validate(request).model_dump(),
        message="Your meeting request has been sent",
    )


# GET /meeting-requests - admin
@router.get("", response_model=APIResponse)
async def list_meeting_requests(
    advisor_id: uuid.UUID | None = None,
    status_filter: MeetingRequestStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    filters = MeetingRequestFilter(advisor_id=advisor_id, status=status_filter, page=page, per_page=per_page)
    requests, total = await meeting_request_service.list_requests(db, filters)
    return APIResponse(
        status="success",
        data=[MeetingRequestResponse.model_validate(r).model_dump() for r in requests],
        pagination=PaginationMeta.build(total, page, per_page),
    )


# GET /meeting-requests/mine - requests addressed to the caller's advisor profile
@router.get("/mine", response_model=APIResponse)
async def list_my_meeting_requests(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    requests, total = await meeting_request_service.list_for_owner(db, current_user, page, per_page)
    return APIResponse(
        status="success",
        data=[MeetingRequestResponse.model_validate(r).model_dump() for r in requests],
        pagination=PaginationMeta.build(total, page, per_page),
    )


# PATCH /meeting-requests/{id}/status - admin or owning advisor
@router.patch("/{request_id}/status", response_model=APIResponse)
async def change_meeting_request_status(
    request_id: uuid.UUID,
    body: MeetingRequestStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    request = await meeting_request_service.change_status(db, request_id, body.status, current_user)
    return APIResponse(status="success", data=MeetingRequestResponse.model_validate(request).model_dump())
