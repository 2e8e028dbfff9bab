from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import ensure_admin, get_optional_principal, require_admin
from core.utils.response import Response
from schemas.ad import AdCreate, AdUpdate, AdResponse
from services.ads import AdService

router = APIRouter(prefix="/ads", tags=["Ads"])


@router.get("")
async def list_ads(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(10, ge=1, le=100),
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Banner ads currently running; ``status=all`` lists everything for admins."""
    include_all = status_filter == "all"
    if include_all:
        ensure_admin(principal)
    ads = await AdService(db).list_ads(include_all=include_all, limit=limit)
    return Response.collection("ads", [AdResponse.model_validate(a) for a in ads])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ad(
    ad_data: AdCreate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    ad = await AdService(db).create_ad(ad_data)
    return Response.success(
        data=AdResponse.model_validate(ad),
        message="Ad created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{ad_id}")
async def get_ad(ad_id: UUID, db: AsyncSession = Depends(get_db)):
    ad = await AdService(db).get_ad(ad_id)
    return Response.success(data=AdResponse.model_validate(ad))


@router.patch("/{ad_id}")
async def update_ad(
    ad_id: UUID,
    ad_data: AdUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    ad = await AdService(db).update_ad(ad_id, ad_data)
    return Response.success(data=AdResponse.model_validate(ad), message="Ad updated successfully")


@router.delete("/{ad_id}")
async def delete_ad(
    ad_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await AdService(db).delete_ad(ad_id)
    return Response.success(message="Ad deleted successfully")
