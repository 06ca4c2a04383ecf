"""Investment and accounting firm directory logic."""
import uuid

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.accounting_firm import AccountingFirm
from app.models.audit_log import AuditAction, AuditLog
from app.models.investment_firm import (
    InvestmentFirm,
    InvestmentFirmClient,
    InvestmentFirmFeature,
    InvestmentFirmLeader,
    InvestmentFirmRegulatoryInfo,
    MoneyMakingMethod,
)
from app.models.user import User
from app.repositories import firm_repository
from app.schemas.firm import (
    AccountingFirmCreate,
    AccountingFirmFilter,
    AccountingFirmSummary,
    AccountingFirmUpdate,
    InvestmentFirmCreate,
    InvestmentFirmFilter,
    InvestmentFirmSummary,
    InvestmentFirmUpdate,
)
from app.utils import query_cache
from app.utils.helpers import parse_money_amount, unique_slug

INVESTMENT_NAMESPACE = "investment_firms"
ACCOUNTING_NAMESPACE = "accounting_firms"
# path segments of fixed /investment-firms routes
RESERVED_INVESTMENT_SLUGS = frozenset({"states"})

_CHILD_FIELDS = {"features", "leadership", "money_making_methods", "clients", "regulatory_info"}


def _audit(user: User, action: AuditAction, entity_type: str, entity_id, changes: dict) -> AuditLog:
    return AuditLog(
        user_id=user.id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        changes=changes,
    )


def _replace_children(firm: InvestmentFirm, children: dict) -> None:
    """Swap child collections for those present in ``children``."""
    if children.get("features") is not None:
        firm.features = [InvestmentFirmFeature(feature=f) for f in children["features"]]
    if children.get("leadership") is not None:
        firm.leadership = [InvestmentFirmLeader(**leader) for leader in children["leadership"]]
    if children.get("money_making_methods") is not None:
        firm.money_making_methods = [MoneyMakingMethod(**m) for m in children["money_making_methods"]]
    if children.get("clients") is not None:
        firm.clients = [InvestmentFirmClient(client_type=c) for c in children["clients"]]
    if children.get("regulatory_info") is not None:
        firm.regulatory_info = [InvestmentFirmRegulatoryInfo(registration=r) for r in children["regulatory_info"]]


# --- Investment firms ---

async def list_investment_firms(db: AsyncSession, filters: InvestmentFirmFilter) -> dict:
    async def load() -> dict:
        firms, total = await firm_repository.list_investment_firms(
            db,
            search=filters.search,
            state=filters.state,
            asset_class=filters.asset_class.value if filters.asset_class else None,
            minimum=filters.minimum.value if filters.minimum else None,
            skip=(filters.page - 1) * filters.per_page,
            limit=filters.per_page,
        )
        return {
            "items": [InvestmentFirmSummary.model_validate(f).model_dump(mode="json") for f in firms],
            "total": total,
        }

    return await query_cache.get_or_set(INVESTMENT_NAMESPACE, filters.model_dump(mode="json"), load)


async def list_headquarters(db: AsyncSession) -> list[str]:
    async def load() -> list[str]:
        return await firm_repository.list_headquarters(db)

    return await query_cache.get_or_set(INVESTMENT_NAMESPACE, {"kind": "states"}, load)


async def get_investment_firm(db: AsyncSession, firm_id: uuid.UUID) -> InvestmentFirm:
    firm = await firm_repository.get_investment_firm(db, firm_id)
    if not firm:
        raise HTTPException(status_code=404, detail="Investment firm not found")
    return firm


async def get_investment_firm_by_slug(db: AsyncSession, slug: str) -> InvestmentFirm:
    firm = await firm_repository.get_investment_firm_by_slug(db, slug)
    if not firm:
        raise HTTPException(status_code=404, detail="Investment firm not found")
    return firm


async def list_similar(db: AsyncSession, slug: str) -> list[InvestmentFirm]:
    firm = await get_investment_firm_by_slug(db, slug)
    return await firm_repository.list_similar_firms(db, firm.id)


async def _investment_slug_taken(db: AsyncSession, slug: str) -> bool:
    return slug in RESERVED_INVESTMENT_SLUGS or await firm_repository.investment_slug_exists(db, slug)


async def create_investment_firm(db: AsyncSession, data: InvestmentFirmCreate, user: User) -> InvestmentFirm:
    values = data.model_dump(mode="json", exclude=_CHILD_FIELDS)
    values["established"] = data.established
    if values.get("slug"):
        if await _investment_slug_taken(db, values["slug"]):
            raise HTTPException(status_code=409, detail="Slug already in use")
    else:
        values["slug"] = await unique_slug(
            data.name, lambda s: firm_repository.investment_slug_exists(db, s), "firm", RESERVED_INVESTMENT_SLUGS,
        )

    firm = InvestmentFirm(**values)
    _replace_children(firm, data.model_dump(include=_CHILD_FIELDS))
    firm = await firm_repository.create(db, firm)

    db.add(_audit(user, AuditAction.CREATE, "investment_firm", firm.id, {"name": firm.name}))
    query_cache.invalidate_on_commit(db, INVESTMENT_NAMESPACE)
    return firm


async def update_investment_firm(
    db: AsyncSession, firm: InvestmentFirm, data: InvestmentFirmUpdate, user: User,
) -> InvestmentFirm:
    values = data.model_dump(exclude_unset=True, mode="json", exclude=_CHILD_FIELDS)
    if "established" in values:
        values["established"] = data.established
    new_slug = values.get("slug")
    if new_slug and new_slug != firm.slug and await _investment_slug_taken(db, new_slug):
        raise HTTPException(status_code=409, detail="Slug already in use")
    if "slug" in values and not new_slug:
        values.pop("slug")

    changes = {}
    for key, value in values.items():
        old_value = getattr(firm, key)
        setattr(firm, key, value)
        changes[key] = {"from": str(old_value), "to": str(value)}

    children = data.model_dump(exclude_unset=True, include=_CHILD_FIELDS)
    _replace_children(firm, children)
    changes.update({key: "replaced" for key, value in children.items() if value is not None})

    firm = await firm_repository.update(db, firm)
    if changes:
        db.add(_audit(user, AuditAction.UPDATE, "investment_firm", firm.id, changes))
    query_cache.invalidate_on_commit(db, INVESTMENT_NAMESPACE)
    return firm


async def set_similar_firms(
    db: AsyncSession, firm: InvestmentFirm, firm_ids: list[uuid.UUID], user: User,
) -> list[InvestmentFirm]:
    ids = list(dict.fromkeys(firm_ids))
    if firm.id in ids:
        raise HTTPException(status_code=400, detail="A firm cannot be similar to itself")
    if await firm_repository.count_investment_firms(db, ids) != len(ids):
        raise HTTPException(status_code=404, detail="One or more similar firms not found")

    await firm_repository.replace_similar_firms(db, firm.id, ids)
    db.add(_audit(
        user, AuditAction.UPDATE, "investment_firm", firm.id,
        {"similar_firms": [str(i) for i in ids]},
    ))
    return await firm_repository.list_similar_firms(db, firm.id)


async def delete_investment_firm(db: AsyncSession, firm: InvestmentFirm, user: User) -> None:
    db.add(_audit(user, AuditAction.DELETE, "investment_firm", firm.id, {"name": firm.name}))
    await firm_repository.delete_investment_firm(db, firm)
    query_cache.invalidate_on_commit(db, INVESTMENT_NAMESPACE)


# --- Accounting firms ---

async def list_accounting_firms(db: AsyncSession, filters: AccountingFirmFilter) -> dict:
    async def load() -> dict:
        firms, total = await firm_repository.list_accounting_firms(
            db,
            search=filters.search,
            specialty=filters.specialty.value if filters.specialty else None,
            service=filters.service.value if filters.service else None,
            fee=filters.fee.value if filters.fee else None,
            skip=(filters.page - 1) * filters.per_page,
            limit=filters.per_page,
        )
        return {
            "items": [AccountingFirmSummary.model_validate(f).model_dump(mode="json") for f in firms],
            "total": total,
        }

    return await query_cache.get_or_set(ACCOUNTING_NAMESPACE, filters.model_dump(mode="json"), load)


async def get_accounting_firm(db: AsyncSession, firm_id: uuid.UUID) -> AccountingFirm:
    firm = await firm_repository.get_accounting_firm(db, firm_id)
    if not firm:
        raise HTTPException(status_code=404, detail="Accounting firm not found")
    return firm


async def get_accounting_firm_by_slug(db: AsyncSession, slug: str) -> AccountingFirm:
    firm = await firm_repository.get_accounting_firm_by_slug(db, slug)
    if not firm:
        raise HTTPException(status_code=404, detail="Accounting firm not found")
    return firm


async def create_accounting_firm(db: AsyncSession, data: AccountingFirmCreate, user: User) -> AccountingFirm:
    values = data.model_dump(mode="json")
    if values.get("slug"):
        if await firm_repository.accounting_slug_exists(db, values["slug"]):
            raise HTTPException(status_code=409, detail="Slug already in use")
    else:
        values["slug"] = await unique_slug(
            data.name, lambda s: firm_repository.accounting_slug_exists(db, s), "firm"
        )

    firm = AccountingFirm(**values)
    firm.minimum_fee_amount = parse_money_amount(firm.minimum_fee)
    firm = await firm_repository.create(db, firm)

    db.add(_audit(user, AuditAction.CREATE, "accounting_firm", firm.id, {"name": firm.name}))
    query_cache.invalidate_on_commit(db, ACCOUNTING_NAMESPACE)
    return firm


async def update_accounting_firm(
    db: AsyncSession, firm: AccountingFirm, data: AccountingFirmUpdate, user: User,
) -> AccountingFirm:
    values = data.model_dump(exclude_unset=True, mode="json")
    new_slug = values.get("slug")
    if new_slug and new_slug != firm.slug and await firm_repository.accounting_slug_exists(db, new_slug):
        raise HTTPException(status_code=409, detail="Slug already in use")
    if "slug" in values and not new_slug:
        values.pop("slug")

    changes = {}
    for key, value in values.items():
        old_value = getattr(firm, key)
        setattr(firm, key, value)
        changes[key] = {"from": str(old_value), "to": str(value)}
    if "minimum_fee" in values:
        firm.minimum_fee_amount = parse_money_amount(firm.minimum_fee)

    firm = await firm_repository.update(db, firm)
    if changes:
        db.add(_audit(user, AuditAction.UPDATE, "accounting_firm", firm.id, changes))
    query_cache.invalidate_on_commit(db, ACCOUNTING_NAMESPACE)
    return firm


async def delete_accounting_firm(db: AsyncSession, firm: AccountingFirm, user: User) -> None:
    db.add(_audit(user, AuditAction.DELETE, "accounting_firm", firm.id, {"name": firm.name}))
    await firm_repository.delete(db, firm)
    query_cache.invalidate_on_commit(db, ACCOUNTING_NAMESPACE)
