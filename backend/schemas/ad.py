from pydantic import Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class AdCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    image: Optional[str] = None
    link: Optional[str] = None
    valid_until: datetime
    is_active: bool = True


class AdUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    image: Optional[str] = None
    link: Optional[str] = None
    valid_until: Optional[datetime] = None
    is_active: Optional[bool] = None


class AdResponse(CamelModel):
    id: UUID
    title: str
    image: Optional[str] = None
    link: Optional[str] = None
    valid_until: AwareDatetime
    is_active: bool
    created_at: Optional[AwareDatetime] = None
    updated_at: Optional[AwareDatetime] = None
