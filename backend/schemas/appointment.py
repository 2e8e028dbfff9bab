from pydantic import EmailStr, Field
from typing import Literal, Optional
from datetime import date
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class AppointmentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1)
    email: EmailStr
    class_type: str = Field(..., min_length=1, max_length=100)
    scheduled_date: date
    scheduled_time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    notes: Optional[str] = None


class AppointmentStatusUpdate(CamelModel):
    status: Literal["PENDING", "CONFIRMED", "COMPLETED", "CANCELLED"]


class AppointmentResponse(CamelModel):
    id: UUID
    name: str
    phone: str
    email: str
    class_type: str
    scheduled_date: AwareDatetime
    scheduled_time: str
    notes: Optional[str] = None
    status: str
    created_at: Optional[AwareDatetime] = None
