from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import require_admin
from core.utils.response import Response
from schemas.plan import PlanCreate, PlanUpdate, PlanResponse
from services.plans import PlanService

router = APIRouter(prefix="/plans", tags=["Plans"])


@router.get("")
async def list_plans(db: AsyncSession = Depends(get_db)):
    """Membership plans; the defaults are created on first access."""
    plans = await PlanService(db).list_plans()
    return Response.collection("plans", [PlanResponse.model_validate(p) for p in plans])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_plan(
    plan_data: PlanCreate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    plan = await PlanService(db).create_plan(plan_data)
    return Response.success(
        data=PlanResponse.model_validate(plan),
        message="Plan created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{plan_id}")
async def update_plan(
    plan_id: UUID,
    plan_data: PlanUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    plan = await PlanService(db).update_plan(plan_id, plan_data)
    return Response.success(data=PlanResponse.model_validate(plan), message="Plan updated successfully")


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await PlanService(db).delete_plan(plan_id)
    return Response.success(message="Plan deleted successfully")
