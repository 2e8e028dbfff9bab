from pydantic import Field
from typing import Optional
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class TestimonialCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    image: Optional[str] = None
    is_active: bool = True


class TestimonialUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    image: Optional[str] = None
    is_active: Optional[bool] = None


class TestimonialResponse(CamelModel):
    id: UUID
    name: str
    content: str
    rating: int
    image: Optional[str] = None
    is_active: bool
    created_at: Optional[AwareDatetime] = None
