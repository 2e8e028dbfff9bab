from pydantic import EmailStr, Field
from typing import Literal, Optional
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime

RoleLiteral = Literal["USER", "ADMIN"]
StatusLiteral = Literal["ACTIVE", "BANNED"]


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: RoleLiteral = "USER"
    status: StatusLiteral = "ACTIVE"


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[RoleLiteral] = None
    status: Optional[StatusLiteral] = None


class UserResponse(CamelModel):
    id: UUID
    name: str
    email: str
    role: str
    status: str
    image: Optional[str] = None
    created_at: Optional[AwareDatetime] = None
    updated_at: Optional[AwareDatetime] = None
