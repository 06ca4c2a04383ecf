"""Investment firms API - public listing and admin maintenance."""
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, require_admin
from app.models.taxonomy import AssetClass
from app.models.user import User
from app.schemas.common import APIResponse, PaginationMeta
from app.schemas.firm import (
    InvestmentFirmCreate,
    InvestmentFirmFilter,
    InvestmentFirmResponse,
    InvestmentFirmSummary,
    InvestmentFirmUpdate,
    MinimumInvestmentBucket,
    SimilarFirmsUpdate,
)
from app.services import firm_service

router = APIRouter()


# GET /investment-firms
@router.get("", response_model=APIResponse)
async def list_investment_firms(
    search: str | None = None,
    state: str | None = None,
    asset_class: AssetClass | None = None,
    minimum: MinimumInvestmentBucket | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    filters = InvestmentFirmFilter(
        search=search or None, state=state or None, asset_class=asset_class,
        minimum=minimum, page=page, per_page=per_page,
    )
    result = await firm_service.list_investment_firms(db, filters)
    return APIResponse(
        status="success",
        data=result["items"],
        pagination=PaginationMeta.build(result["total"], page, per_page),
    )


# GET /investment-firms/states
@router.get("/states", response_model=APIResponse)
async def list_states(db: AsyncSession = Depends(get_db)):
    return APIResponse(status="success", data=await firm_service.list_headquarters(db))


# GET /investment-firms/{slug}
@router.get("/{slug}", response_model=APIResponse)
async def get_investment_firm(slug: str, db: AsyncSession = Depends(get_db)):
    firm = await firm_service.get_investment_firm_by_slug(db, slug)
    return APIResponse(status="success", data=InvestmentFirmResponse.model_validate(firm).model_dump())


# GET /investment-firms/{slug}/similar
@router.get("/{slug}/similar", response_model=APIResponse)
async def list_similar_firms(slug: str, db: AsyncSession = Depends(get_db)):
    firms = await firm_service.list_similar(db, slug)
    return APIResponse(
        status="success",
        data=[InvestmentFirmSummary.model_validate(f).model_dump() for f in firms],
    )


# POST /investment-firms - admin
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_investment_firm(
    body: InvestmentFirmCreate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.create_investment_firm(db, body, admin)
    return APIResponse(status="success", data=InvestmentFirmResponse.model_validate(firm).model_dump())


# PUT /investment-firms/{id} - admin
@router.put("/{firm_id}", response_model=APIResponse)
async def update_investment_firm(
    firm_id: uuid.UUID,
    body: InvestmentFirmUpdate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.get_investment_firm(db, firm_id)
    firm = await firm_service.update_investment_firm(db, firm, body, admin)
    return APIResponse(status="success", data=InvestmentFirmResponse.model_validate(firm).model_dump())


# PUT /investment-firms/{id}/similar - admin
@router.put("/{firm_id}/similar", response_model=APIResponse)
async def set_similar_firms(
    firm_id: uuid.UUID,
    body: SimilarFirmsUpdate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.get_investment_firm(db, firm_id)
    similar = await firm_service.set_similar_firms(db, firm, body.firm_ids, admin)
    return APIResponse(
        status="success",
        data=[InvestmentFirmSummary.model_validate(f).model_dump() for f in similar],
    )


# DELETE /investment-firms/{id} - admin
@router.delete("/{firm_id}", response_model=APIResponse)
async def delete_investment_firm(
    firm_id: uuid.UUID,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.get_investment_firm(db, firm_id)
    await firm_service.delete_investment_firm(db, firm, admin)
    return APIResponse(status="success", message="Investment firm deleted")
