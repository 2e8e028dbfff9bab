from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import get_optional_principal, require_admin
from core.utils.response import Response
from schemas.referral import ReferralCreate, ReferralResponse
from services.referrals import ReferralService

router = APIRouter(prefix="/referrals", tags=["Referrals"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_referral(
    referral_data: ReferralCreate,
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Refer a friend; the signed-in member is recorded as the referrer."""
    referral = await ReferralService(db).create_referral(referral_data, principal)
    return Response.success(
        data=ReferralResponse.model_validate(referral),
        message="Referral registered successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("")
async def list_referrals(
    limit: int = Query(100, ge=1, le=500),
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    referrals = await ReferralService(db).list_referrals(limit=limit)
    return Response.collection("referrals", [ReferralResponse.model_validate(r) for r in referrals])
