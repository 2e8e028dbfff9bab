from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import require_admin
from core.utils.response import Response
from schemas.appointment import AppointmentCreate, AppointmentStatusUpdate, AppointmentResponse
from services.appointments import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def book_appointment(appointment_data: AppointmentCreate, db: AsyncSession = Depends(get_db)):
    """Book a trial class; the slot must be in the future and free."""
    appointment = await AppointmentService(db).create_appointment(appointment_data)
    return Response.success(
        data=AppointmentResponse.model_validate(appointment),
        message="Appointment booked successfully! We will contact you to confirm.",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("")
async def list_appointments(
    status_filter: Optional[Literal["PENDING", "CONFIRMED", "COMPLETED", "CANCELLED"]] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    appointments = await AppointmentService(db).list_appointments(status=status_filter, limit=limit)
    return Response.collection("appointments", [AppointmentResponse.model_validate(a) for a in appointments])


@router.patch("/{appointment_id}")
async def update_appointment_status(
    appointment_id: UUID,
    status_data: AppointmentStatusUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    appointment = await AppointmentService(db).update_status(appointment_id, status_data.status)
    return Response.success(
        data=AppointmentResponse.model_validate(appointment),
        message="Appointment status updated successfully",
    )


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await AppointmentService(db).delete_appointment(appointment_id)
    return Response.success(message="Appointment deleted successfully")
