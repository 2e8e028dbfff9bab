from pydantic import Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class PromotionBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    image: Optional[str] = None
    valid_until: datetime


class PromotionCreate(PromotionBase):
    pass


class PromotionUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    valid_until: Optional[datetime] = None
    is_active: Optional[bool] = None


class PromotionResponse(CamelModel):
    id: UUID
    title: str
    description: str
    image: Optional[str] = None
    valid_until: AwareDatetime
    is_active: bool
    unique_code: Optional[str] = None
    short_code: Optional[str] = None
    access_count: int
    created_at: Optional[AwareDatetime] = None
    updated_at: Optional[AwareDatetime] = None
