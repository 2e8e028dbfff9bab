from fastapi import APIRouter, Query

from core.utils.response import Response
from schemas.homev2 import AnnualSavingsResponse, StatusResponse
from services.homev2 import calculate_annual_savings, current_gym_status

router = APIRouter(prefix="/homev2", tags=["Home"])


@router.get("/status")
async def get_status():
    """Whether the gym is open right now and when that changes"""
    return Response.success(data=StatusResponse(**current_gym_status()))


@router.get("/annual-savings")
async def get_annual_savings(
    monthly_price: float = Query(0, alias="monthlyPrice"),
    billing_cycle: str = Query("monthly", alias="billingCycle"),
):
    result = calculate_annual_savings(monthly_price, billing_cycle)
    return Response.success(data=AnnualSavingsResponse(**result))
