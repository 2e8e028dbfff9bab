from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from fastapi.responses import Response as RawResponse
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import require_admin
from core.exceptions import APIException
from core.utils.response import Response
from schemas.checkin import (
    CheckInCreate,
    CheckInResponse,
    CheckinCodeResponse,
    CheckinValidationResponse,
)
from services.checkin import CheckinService, checkin_url
from services.qrcode import QRCodeService

qr_router = APIRouter(prefix="/qr", tags=["Check-in"])
router = APIRouter(prefix="/checkin", tags=["Check-in"])


@qr_router.get("/generate")
async def generate_daily_code(
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Today's check-in code, created on first request of the day."""
    checkin_code = await CheckinService(db).get_or_create_today_code()
    return Response.success(
        data=CheckinCodeResponse(
            code=checkin_code.code,
            valid_date=checkin_code.valid_date,
            qr_url=checkin_url(checkin_code.code),
        )
    )


@qr_router.get("/image")
async def qr_image(code: Optional[str] = Query(None), db: AsyncSession = Depends(get_db)):
    checkin_code = await CheckinService(db).get_valid_code(code)
    png = QRCodeService.render_png(checkin_url(checkin_code.code))
    return RawResponse(
        content=png,
        media_type="image/png",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/validate")
async def validate_code(code: Optional[str] = Query(None), db: AsyncSession = Depends(get_db)):
    try:
        checkin_code = await CheckinService(db).get_valid_code(code)
    except APIException as e:
        # The check-in page reads ``valid`` on failures too
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_payload(valid=False),
        )
    return Response.success(
        data=CheckinValidationResponse(valid=True, code=checkin_code.code, valid_date=checkin_code.valid_date)
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def check_in(checkin_data: CheckInCreate, db: AsyncSession = Depends(get_db)):
    check_in = await CheckinService(db).register_checkin(checkin_data)
    return Response.success(
        data=CheckInResponse.model_validate(check_in),
        message="Check-in successful!",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("")
async def list_today_checkins(
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    check_ins = await CheckinService(db).list_today_checkins()
    return Response.collection("checkIns", [CheckInResponse.model_validate(c) for c in check_ins])
