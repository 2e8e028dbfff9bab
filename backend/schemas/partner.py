from pydantic import Field
from typing import Optional
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class PartnerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    logo: Optional[str] = None
    link: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=100)
    is_active: bool = True


class PartnerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    logo: Optional[str] = None
    link: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    is_active: Optional[bool] = None


class PartnerResponse(CamelModel):
    id: UUID
    name: str
    description: str
    logo: Optional[str] = None
    link: Optional[str] = None
    category: str
    is_active: bool
    created_at: Optional[AwareDatetime] = None
    updated_at: Optional[AwareDatetime] = None
