from pydantic import EmailStr, Field
from uuid import UUID

from schemas.response import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class PrincipalResponse(CamelModel):
    id: UUID
    email: str
    name: str
    role: str
