from typing import Optional
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import ensure_admin, get_optional_principal, require_admin
from core.exceptions import APIException
from core.utils.response import Response
from schemas.promotion import PromotionCreate, PromotionUpdate, PromotionResponse
from services.promotions import PromotionService

router = APIRouter(prefix="/promotions", tags=["Promotions"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_promotions(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Active, non-expired promotions; ``status=all`` lists everything for admins."""
    include_all = status_filter == "all"
    if include_all:
        ensure_admin(principal)
    promotions = await PromotionService(db).list_promotions(include_all=include_all, limit=limit)
    return Response.collection("promotions", [PromotionResponse.model_validate(p) for p in promotions])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_promotion(
    promotion_data: PromotionCreate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a promotion with freshly generated unique and short codes."""
    try:
        promotion = await PromotionService(db).create_promotion(promotion_data)
        return Response.success(
            data=PromotionResponse.model_validate(promotion),
            message="Promotion created successfully",
            status_code=status.HTTP_201_CREATED,
        )
    except APIException:
        raise
    except Exception as e:
        logger.exception("Failed to create promotion")
        raise APIException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=f"Failed to create promotion - {str(e)}"
        )


@router.get("/{id_or_code}")
async def get_promotion(id_or_code: str, db: AsyncSession = Depends(get_db)):
    promotion = await PromotionService(db).get_promotion(id_or_code)
    return Response.success(data=PromotionResponse.model_validate(promotion))


@router.patch("/{promotion_id}")
async def update_promotion(
    promotion_id: UUID,
    promotion_data: PromotionUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    promotion = await PromotionService(db).update_promotion(promotion_id, promotion_data)
    return Response.success(
        data=PromotionResponse.model_validate(promotion),
        message="Promotion updated successfully",
    )


@router.delete("/{promotion_id}")
async def delete_promotion(
    promotion_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await PromotionService(db).delete_promotion(promotion_id)
    return Response.success(message="Promotion deleted successfully")
