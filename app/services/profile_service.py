"""Profile administration."""
import uuid

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.audit_log import AuditAction, AuditLog
from app.models.user import Profile, User
from app.repositories import user_repository
from app.schemas.auth import ProfileFilter


async def list_profiles(db: AsyncSession, filters: ProfileFilter) -> tuple[list[Profile], int]:
    return await user_repository.list_profiles(
        db,
        search=filters.search,
        is_admin=filters.is_admin,
        skip=(filters.page - 1) * filters.per_page,
        limit=filters.per_page,
    )


async def set_admin_flag(db: AsyncSession, user_id: uuid.UUID, is_admin: bool, admin: User) -> Profile:
    profile = await user_repository.get_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    if profile.id == admin.id and not is_admin:
        raise HTTPException(status_code=400, detail="You cannot revoke your own admin access")

    old_value = profile.is_admin
    profile.is_admin = is_admin
    db.add(AuditLog(
        user_id=admin.id,
        action=AuditAction.UPDATE,
        entity_type="profile",
        entity_id=profile.id,
        changes={"is_admin": {"from": old_value, "to": is_admin}},
    ))
    return await user_repository.update_profile(db, profile)
