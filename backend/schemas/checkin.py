from pydantic import Field
from typing import Optional
from datetime import date
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class CheckinCodeResponse(CamelModel):
    code: str
    valid_date: date
    qr_url: str


class CheckinValidationResponse(CamelModel):
    valid: bool
    code: str
    valid_date: date


class CheckInCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1)
    code: Optional[str] = None


class CheckInResponse(CamelModel):
    id: UUID
    name: str
    phone: str
    check_in_time: AwareDatetime
    status: str
    code_id: Optional[UUID] = None
