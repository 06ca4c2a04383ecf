"""Accounting firms API - public listing and admin maintenance."""
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, require_admin
from app.models.taxonomy import AccountingService, ClientSpecialty
from app.models.user import User
from app.schemas.common import APIResponse, PaginationMeta
from app.schemas.firm import (
    AccountingFirmCreate,
    AccountingFirmFilter,
    AccountingFirmResponse,
    AccountingFirmUpdate,
    MinimumFeeBucket,
)
from app.services import firm_service

router = APIRouter()


# GET /accounting-firms
@router.get("", response_model=APIResponse)
async def list_accounting_firms(
    search: str | None = None,
    specialty: ClientSpecialty | None = None,
    service: AccountingService | None = None,
    fee: MinimumFeeBucket | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    filters = AccountingFirmFilter(
        search=search or None, specialty=specialty, service=service, fee=fee,
        page=page, per_page=per_page,
    )
    result = await firm_service.list_accounting_firms(db, filters)
    return APIResponse(
        status="success",
        data=result["items"],
        pagination=PaginationMeta.build(result["total"], page, per_page),
    )


# GET /accounting-firms/{slug}
@router.get("/{slug}", response_model=APIResponse)
async def get_accounting_firm(slug: str, db: AsyncSession = Depends(get_db)):
    firm = await firm_service.get_accounting_firm_by_slug(db, slug)
    return APIResponse(status="success", data=AccountingFirmResponse.model_validate(firm).model_dump())


# POST /accounting-firms - admin
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_accounting_firm(
    body: AccountingFirmCreate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.create_accounting_firm(db, body, admin)
    return APIResponse(status="success", data=AccountingFirmResponse.model_validate(firm).model_dump())


# PUT /accounting-firms/{id} - admin
@router.put("/{firm_id}", response_model=APIResponse)
async def update_accounting_firm(
    firm_id: uuid.UUID,
    body: AccountingFirmUpdate,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.get_accounting_firm(db, firm_id)
    firm = await firm_service.update_accounting_firm(db, firm, body, admin)
    return APIResponse(status="success", data=AccountingFirmResponse.model_validate(firm).model_dump())


# DELETE /accounting-firms/{id} - admin
@router.delete("/{firm_id}", response_model=APIResponse)
async def delete_accounting_firm(
    firm_id: uuid.UUID,
    admin: User = require_admin(),
    db: AsyncSession = Depends(get_db),
):
    firm = await firm_service.get_accounting_firm(db, firm_id)
    await firm_service.delete_accounting_firm(db, firm, admin)
    return APIResponse(status="success", message="Accounting firm deleted")
