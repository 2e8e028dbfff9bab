from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import require_admin
from core.utils.response import Response
from schemas.settings import AcademySettingsUpdate, AcademySettingsResponse
from services.settings import SettingsService

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("")
async def get_settings(db: AsyncSession = Depends(get_db)):
    academy = await SettingsService(db).get_settings()
    return Response.success(data=AcademySettingsResponse.model_validate(academy))


@router.put("")
async def update_settings(
    settings_data: AcademySettingsUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    academy = await SettingsService(db).update_settings(settings_data)
    return Response.success(
        data=AcademySettingsResponse.model_validate(academy),
        message="Settings updated successfully",
    )
