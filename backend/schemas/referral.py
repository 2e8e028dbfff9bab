from pydantic import EmailStr, Field
from typing import Optional
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class ReferralCreate(CamelModel):
    referred_name: str = Field(..., min_length=1, max_length=255)
    referred_phone: str = Field(..., min_length=1)
    referred_email: Optional[EmailStr] = None


class ReferralResponse(CamelModel):
    id: UUID
    referrer_id: Optional[UUID] = None
    referrer_name: str
    referrer_email: Optional[str] = None
    referred_name: str
    referred_phone: str
    referred_email: Optional[str] = None
    status: str
    created_at: Optional[AwareDatetime] = None
