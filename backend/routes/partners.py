from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import ensure_admin, get_optional_principal, require_admin
from core.utils.response import Response
from schemas.partner import PartnerCreate, PartnerUpdate, PartnerResponse
from services.partners import PartnerService

router = APIRouter(prefix="/partners", tags=["Partners"])


@router.get("")
async def list_partners(
    category: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    include_all = status_filter == "all"
    if include_all:
        ensure_admin(principal)
    partners = await PartnerService(db).list_partners(category=category, include_all=include_all, limit=limit)
    return Response.collection("partners", [PartnerResponse.model_validate(p) for p in partners])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_partner(
    partner_data: PartnerCreate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    partner = await PartnerService(db).create_partner(partner_data)
    return Response.success(
        data=PartnerResponse.model_validate(partner),
        message="Partner created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{partner_id}")
async def get_partner(partner_id: UUID, db: AsyncSession = Depends(get_db)):
    partner = await PartnerService(db).get_partner(partner_id)
    return Response.success(data=PartnerResponse.model_validate(partner))


@router.patch("/{partner_id}")
async def update_partner(
    partner_id: UUID,
    partner_data: PartnerUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    partner = await PartnerService(db).update_partner(partner_id, partner_data)
    return Response.success(data=PartnerResponse.model_validate(partner), message="Partner updated successfully")


@router.delete("/{partner_id}")
async def delete_partner(
    partner_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await PartnerService(db).delete_partner(partner_id)
    return Response.success(message="Partner deleted successfully")
