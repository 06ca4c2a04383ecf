"""Advisor registration, approval workflow and public directory queries."""
import logging
import uuid

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.advisor import Advisor, AdvisorApproval, AdvisorStatus
from app.models.audit_log import AuditAction, AuditLog
from app.models.user import User
from app.repositories import advisor_repository
from app.schemas.advisor import (
    AdvisorAdminFilter,
    AdvisorAdminUpdate,
    AdvisorFilter,
    AdvisorProfileUpdate,
    AdvisorRegistration,
    AdvisorSummary,
)
from app.utils import query_cache
from app.utils.helpers import parse_money_amount, unique_slug, utc_now

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "advisors"
# path segments of fixed /advisors routes
RESERVED_SLUGS = frozenset({"admin", "me", "states"})

# --- Workflow transition rules ---

TRANSITIONS: dict[str, set[str]] = {
    # from_status -> allowed to_statuses
    "draft": {"pending_approval"},
    "pending_approval": {"approved", "rejected"},
}

# set by the workflow only, never copied from an owner payload
_WORKFLOW_FIELDS = {
    "status", "verified", "premium", "approved_by", "approved_at",
    "rejection_reason", "submitted_at", "user_id", "rating", "calls_booked",
}


def validate_transition(from_status: AdvisorStatus, to_status: AdvisorStatus) -> None:
    allowed = TRANSITIONS.get(from_status.value, set())
    if to_status.value not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot transition advisor from '{from_status.value}' to '{to_status.value}'",
        )


async def _transition(
    db: AsyncSession,
    advisor: Advisor,
    to_status: AdvisorStatus,
    user: User,
    comment: str | None = None,
) -> AdvisorStatus:
    validate_transition(advisor.status, to_status)
    old_status = advisor.status
    advisor.status = to_status
    await advisor_repository.add_approval(db, AdvisorApproval(
        advisor_id=advisor.id,
        from_status=old_status,
        to_status=to_status,
        reviewer_id=user.id,
        comment=comment,
    ))
    return old_status


def _apply(advisor: Advisor, values: dict) -> dict:
    changes = {}
    for key, value in values.items():
        old_value = getattr(advisor, key)
        if old_value == value:
            continue
        setattr(advisor, key, value)
        changes[key] = {"from": str(old_value), "to": str(value)}
    if "minimum" in changes:
        advisor.minimum_amount = parse_money_amount(advisor.minimum)
    return changes


# --- Owner operations ---

async def register(db: AsyncSession, data: AdvisorRegistration, user: User) -> Advisor:
    if await advisor_repository.get_by_user(db, user.id):
        raise HTTPException(status_code=409, detail="You already have an advisor profile")

    values = data.model_dump(exclude={"terms_accepted", "save_as_draft"}, mode="json")
    advisor = Advisor(**values)
    advisor.email = str(data.email).lower()
    advisor.slug = await unique_slug(
        data.name, lambda s: advisor_repository.slug_exists(db, s), "advisor", RESERVED_SLUGS,
    )
    advisor.minimum_amount = parse_money_amount(data.minimum)
    advisor.user_id = user.id
    advisor.verified = False
    advisor.premium = False
    if data.save_as_draft:
        advisor.status = AdvisorStatus.DRAFT
    else:
        advisor.status = AdvisorStatus.PENDING_APPROVAL
        advisor.submitted_at = utc_now()

    advisor = await advisor_repository.create(db, advisor)

    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.CREATE,
        entity_type="advisor",
        entity_id=advisor.id,
        changes={"name": advisor.name, "status": advisor.status.value},
    ))
    logger.info("Advisor %s registered with status %s", advisor.id, advisor.status.value)
    return advisor


async def get_own(db: AsyncSession, user: User) -> Advisor:
    advisor = await advisor_repository.get_by_user(db, user.id)
    if not advisor:
        raise HTTPException(status_code=404, detail="Advisor profile not found")
    return advisor


async def submit_draft(db: AsyncSession, user: User) -> Advisor:
    advisor = await get_own(db, user)
    await _transition(db, advisor, AdvisorStatus.PENDING_APPROVAL, user)
    advisor.submitted_at = utc_now()

    db.add(AuditLog(
        user_id=user.id,
        action=AuditAction.UPDATE,
        entity_type="advisor",
        entity_id=advisor.id,
        changes={"status": {"from": "draft", "to": "pending_approval"}},
    ))
    return await advisor_repository.update(db, advisor)


async def update_own(db: AsyncSession, user: User, data: AdvisorProfileUpdate) -> Advisor:
    advisor = await get_own(db, user)
    if advisor.status == AdvisorStatus.APPROVED:
        raise HTTPException(status_code=400, detail="Approved profiles can no longer be edited")

    values = data.model_dump(exclude_unset=True, mode="json")
    changes = _apply(advisor, {k: v for k, v in values.items() if k not in _WORKFLOW_FIELDS})
    if changes:
        db.add(AuditLog(
            user_id=user.id,
            action=AuditAction.UPDATE,
            entity_type="advisor",
            entity_id=advisor.id,
            changes=changes,
        ))
    return await advisor_repository.update(db, advisor)


# --- Admin operations ---

async def get_advisor(db: AsyncSession, advisor_id: uuid.UUID) -> Advisor:
    advisor = await advisor_repository.get_by_id(db, advisor_id)
    if not advisor:
        raise HTTPException(status_code=404, detail="Advisor not found")
    return advisor


async def approve(db: AsyncSession, advisor: Advisor, admin: User, comment: str | None = None) -> Advisor:
    old_status = await _transition(db, advisor, AdvisorStatus.APPROVED, admin, comment)
    advisor.approved_by = admin.id
    advisor.approved_at = utc_now()
    advisor.verified = True
    advisor.rejection_reason = None

    db.add(AuditLog(
        user_id=admin.id,
        action=AuditAction.APPROVE,
        entity_type="advisor",
        entity_id=advisor.id,
        changes={"status": {"from": old_status.value, "to": AdvisorStatus.APPROVED.value}},
    ))
    advisor = await advisor_repository.update(db, advisor)
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return advisor


async def reject(db: AsyncSession, advisor: Advisor, admin: User, reason: str) -> Advisor:
    old_status = await _transition(db, advisor, AdvisorStatus.REJECTED, admin, reason)
    advisor.approved_by = admin.id
    advisor.approved_at = utc_now()
    advisor.rejection_reason = reason

    db.add(AuditLog(
        user_id=admin.id,
        action=AuditAction.REJECT,
        entity_type="advisor",
        entity_id=advisor.id,
        changes={
            "status": {"from": old_status.value, "to": AdvisorStatus.REJECTED.value},
            "rejection_reason": reason,
        },
    ))
    advisor = await advisor_repository.update(db, advisor)
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return advisor


async def admin_update(db: AsyncSession, advisor: Advisor, data: AdvisorAdminUpdate, admin: User) -> Advisor:
    changes = _apply(advisor, data.model_dump(exclude_unset=True, mode="json"))
    if changes:
        db.add(AuditLog(
            user_id=admin.id,
            action=AuditAction.UPDATE,
            entity_type="advisor",
            entity_id=advisor.id,
            changes=changes,
        ))
    advisor = await advisor_repository.update(db, advisor)
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)
    return advisor


async def delete_advisor(db: AsyncSession, advisor: Advisor, admin: User) -> None:
    db.add(AuditLog(
        user_id=admin.id,
        action=AuditAction.DELETE,
        entity_type="advisor",
        entity_id=advisor.id,
        changes={"name": advisor.name, "status": advisor.status.value},
    ))
    await advisor_repository.delete(db, advisor)
    query_cache.invalidate_on_commit(db, CACHE_NAMESPACE)


async def list_admin(db: AsyncSession, filters: AdvisorAdminFilter) -> tuple[list[Advisor], int]:
    return await advisor_repository.list_admin(
        db,
        status=filters.status,
        search=filters.search,
        skip=(filters.page - 1) * filters.per_page,
        limit=filters.per_page,
    )


async def list_approvals(db: AsyncSession, advisor_id: uuid.UUID) -> list[AdvisorApproval]:
    await get_advisor(db, advisor_id)
    return await advisor_repository.list_approvals(db, advisor_id)


# --- Public directory ---

async def list_public(db: AsyncSession, filters: AdvisorFilter) -> dict:
    """Approved advisors for one filter combination, as a cacheable payload."""
    async def load() -> dict:
        advisors, total = await advisor_repository.list_public(
            db,
            search=filters.search,
            state=filters.state,
            specialties=filters.specialties,
            client_type=filters.client_type,
            minimum_assets=filters.minimum_assets,
            skip=(filters.page - 1) * filters.per_page,
            limit=filters.per_page,
        )
        return {
            "items": [AdvisorSummary.model_validate(a).model_dump(mode="json") for a in advisors],
            "total": total,
        }

    return await query_cache.get_or_set(CACHE_NAMESPACE, filters.model_dump(mode="json"), load)


async def get_public(db: AsyncSession, slug: str) -> Advisor:
    advisor = await advisor_repository.get_by_slug(db, slug, status=AdvisorStatus.APPROVED)
    if not advisor:
        raise HTTPException(status_code=404, detail="Advisor not found")
    return advisor


async def list_states(db: AsyncSession) -> list[str]:
    async def load() -> list[str]:
        return await advisor_repository.list_states(db)

    return await query_cache.get_or_set(CACHE_NAMESPACE, {"kind": "states"}, load)
