"""Profiles API - admin management of profiles and the admin flag."""
import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, require_admin
from app.models.user import User
from app.schemas.auth import AdminFlagUpdate, ProfileFilter, ProfileResponse
from app.schemas.common import APIResponse, PaginationMeta
from app.services import profile_service

router = APIRouter()


# GET /profiles - admin only
@router.get("", response_model=APIResponse)
async def list_profiles(
    search: str | None = None,
    is_admin: bool | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    _admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    filters = ProfileFilter(search=search, is_admin=is_admin, page=page, per_page=per_page)
    profiles, total = await profile_service.list_profiles(db, filters)
    return APIResponse(
        status="success",
        data=[ProfileResponse.model_validate(p).model_dump() for p in profiles],
        pagination=PaginationMeta.build(total, page, per_page),
    )


# PATCH /profiles/{user_id}/admin - admin only
@router.patch("/{user_id}/admin", response_model=APIResponse)
async def set_admin_flag(
    user_id: uuid.UUID,
    body: AdminFlagUpdate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.set_admin_flag(db, user_id, body.is_admin, admin)
    return APIResponse(
        status="success",
        data=ProfileResponse.model_validate(profile).model_dump(),
    )
