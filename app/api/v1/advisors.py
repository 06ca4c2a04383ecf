"""Advisors API - registration, approval workflow and public directory."""
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_current_user, get_db, require_admin
from app.models.advisor import AdvisorStatus
from app.models.user import User
from app.schemas.advisor import (
    AdvisorAdminFilter,
    AdvisorAdminUpdate,
    AdvisorApprovalResponse,
    AdvisorApproveRequest,
    AdvisorFilter,
    AdvisorProfileUpdate,
    AdvisorRegistration,
    AdvisorRejectRequest,
    AdvisorResponse,
)
from app.schemas.common import APIResponse, PaginationMeta
from app.services import advisor_service

router = APIRouter()


# GET /advisors - public, approved only
@router.get("", response_model=APIResponse)
async def list_advisors(
    search: str | None = None,
    state: str | None = None,
    specialty: list[str] | None = Query(None),
    client_type: str | None = None,
    minimum_assets: int | None = Query(None, ge=0),
    page: int = Query(1, ge=1),
    page_size: int = Query(15, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    filters = AdvisorFilter(
        search=search or None, state=state or None, specialties=specialty or [],
        client_type=client_type or None, minimum_assets=minimum_assets,
        page=page, per_page=page_size,
    )
    result = await advisor_service.list_public(db, filters)
    return APIResponse(
        status="success",
        data=result["items"],
        pagination=PaginationMeta.build(result["total"], page, page_size),
    )


# GET /advisors/states - distinct HQ states of approved advisors
@router.get("/states", response_model=APIResponse)
async def list_states(db: AsyncSession = Depends(get_db)):
    return APIResponse(status="success", data=await advisor_service.list_states(db))


# POST /advisors - register the caller as an advisor
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def register_advisor(
    body: AdvisorRegistration,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.register(db, body, current_user)
    message = "Draft saved" if advisor.status == AdvisorStatus.DRAFT else "Registration submitted for review"
    return APIResponse(
        status="success",
        data=AdvisorResponse.model_validate(advisor).model_dump(),
        message=message,
    )


# GET /advisors/me
@router.get("/me", response_model=APIResponse)
async def get_my_advisor(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.get_own(db, current_user)
    return APIResponse(status="success", data=AdvisorResponse.model_validate(advisor).model_dump())


# PUT /advisors/me - owner edits while not approved
@router.put("/me", response_model=APIResponse)
async def update_my_advisor(
    body: AdvisorProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.update_own(db, current_user, body)
    return APIResponse(status="success", data=AdvisorResponse.model_validate(advisor).model_dump())


# POST /advisors/me/submit - draft → pending_approval
@router.post("/me/submit", response_model=APIResponse)
async def submit_my_advisor(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.submit_draft(db, current_user)
    return APIResponse(
        status="success",
        data=AdvisorResponse.model_validate(advisor).model_dump(),
        message="Registration submitted for review",
    )


# GET /advisors/admin - admin, all statuses
@router.get("/admin", response_model=APIResponse)
async def list_advisors_admin(
    status_filter: AdvisorStatus | None = Query(None, alias="status"),
    search: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    filters = AdvisorAdminFilter(status=status_filter, search=search, page=page, per_page=per_page)
    advisors, total = await advisor_service.list_admin(db, filters)
    return APIResponse(
        status="success",
        data=[AdvisorResponse.model_validate(a).model_dump() for a in advisors],
        pagination=PaginationMeta.build(total, page, per_page),
    )


# GET /advisors/{slug} - public profile, approved only
@router.get("/{slug}", response_model=APIResponse)
async def get_advisor(slug: str, db: AsyncSession = Depends(get_db)):
    advisor = await advisor_service.get_public(db, slug)
    return APIResponse(status="success", data=AdvisorResponse.model_validate(advisor).model_dump())


# PUT /advisors/{id} - admin edit of any field
@router.put("/{advisor_id}", response_model=APIResponse)
async def admin_update_advisor(
    advisor_id: uuid.UUID,
    body: AdvisorAdminUpdate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.get_advisor(db, advisor_id)
    advisor = await advisor_service.admin_update(db, advisor, body, admin)
    return APIResponse(status="success", data=AdvisorResponse.model_validate(advisor).model_dump())


# PATCH /advisors/{id}/approve - admin
@router.patch("/{advisor_id}/approve", response_model=APIResponse)
async def approve_advisor(
    advisor_id: uuid.UUID,
    body: AdvisorApproveRequest | None = None,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.get_advisor(db, advisor_id)
    advisor = await advisor_service.approve(db, advisor, admin, body.comment if body else None)
    return APIResponse(
        status="success",
        data=AdvisorResponse.model_validate(advisor).model_dump(),
        message="Advisor approved",
    )


# PATCH /advisors/{id}/reject - admin, reason required
@router.patch("/{advisor_id}/reject", response_model=APIResponse)
async def reject_advisor(
    advisor_id: uuid.UUID,
    body: AdvisorRejectRequest,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.get_advisor(db, advisor_id)
    advisor = await advisor_service.reject(db, advisor, admin, body.rejection_reason)
    return APIResponse(
        status="success",
        data=AdvisorResponse.model_validate(advisor).model_dump(),
        message="Advisor rejected",
    )


# DELETE /advisors/{id} - admin
@router.delete("/{advisor_id}", response_model=APIResponse)
async def delete_advisor(
    advisor_id: uuid.UUID,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    advisor = await advisor_service.get_advisor(db, advisor_id)
    await advisor_service.delete_advisor(db, advisor, admin)
    return APIResponse(status="success", message="Advisor deleted")


# GET /advisors/{id}/approvals - admin, status history
@router.get("/{advisor_id}/approvals", response_model=APIResponse)
async def list_approvals(
    advisor_id: uuid.UUID,
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    approvals = await advisor_service.list_approvals(db, advisor_id)
    return APIResponse(
        status="success",
        data=[AdvisorApprovalResponse.model_validate(a).model_dump() for a in approvals],
    )
