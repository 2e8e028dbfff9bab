from pydantic import BeforeValidator, Field, field_serializer
from typing import Annotated, List, Optional
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


def _normalize_status(value):
    if value is None:
        return value
    value = str(value).strip().upper()
    if value not in ("ACTIVE", "INACTIVE"):
        raise ValueError("status must be 'active' or 'inactive'")
    return value


# Accepts "active"/"ACTIVE"; stored upper-case
PlanStatusField = Annotated[str, BeforeValidator(_normalize_status)]


class PlanCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    description: str = ""
    features: List[str] = Field(default_factory=list)
    active_members: int = Field(0, ge=0)
    monthly_revenue: float = Field(0, ge=0)
    status: PlanStatusField = "ACTIVE"
    popular: bool = False


class PlanUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    active_members: Optional[int] = Field(None, ge=0)
    monthly_revenue: Optional[float] = Field(None, ge=0)
    status: Optional[PlanStatusField] = None
    popular: Optional[bool] = None


class PlanResponse(CamelModel):
    id: UUID
    name: str
    price: float
    description: str
    features: List[str]
    active_members: int
    monthly_revenue: float
    status: str
    popular: bool
    created_at: Optional[AwareDatetime] = None
    updated_at: Optional[AwareDatetime] = None

    @field_serializer("status")
    def serialize_status(self, status: str) -> str:
        # The public site renders plan status in lower case
        return status.lower()
