"""
The authenticated principal resolved from the session cookie
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from core.utils.auth.jwt_auth import JWTManager

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    user_id: UUID
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def to_claims(self) -> dict:
        return {
            "sub": str(self.user_id),
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


def principal_from_token(token: Optional[str], jwt_manager: Optional[JWTManager] = None) -> Optional[AuthenticatedPrincipal]:
    """Decode a session token into a principal, None if missing or invalid."""
    if not token:
        return None
    payload = (jwt_manager or JWTManager()).verify_token(token)
    if not payload:
        return None
    try:
        user_id = UUID(payload["sub"])
    except (KeyError, ValueError, TypeError):
        return None
    return AuthenticatedPrincipal(
        user_id=user_id,
        email=payload.get("email", ""),
        name=payload.get("name", ""),
        role=payload.get("role", "USER"),
    )
