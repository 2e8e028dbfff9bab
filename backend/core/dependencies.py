from typing import Optional

from fastapi import Depends, Request

from core.auth import AuthenticatedPrincipal
from core.exceptions import AuthenticationException, AuthorizationException


def ensure_admin(principal: Optional[AuthenticatedPrincipal]) -> AuthenticatedPrincipal:
    """401 for anonymous callers, 403 for non-admin principals"""
    if principal is None:
        raise AuthenticationException(message="Authentication required")
    if not principal.is_admin:
        raise AuthorizationException(message="Admin access required")
    return principal


async def get_optional_principal(request: Request) -> Optional[AuthenticatedPrincipal]:
    """Principal resolved by AuthContextMiddleware, None for anonymous requests"""
    return getattr(request.state, "principal", None)


async def get_current_principal(
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
) -> AuthenticatedPrincipal:
    """Require an authenticated principal"""
    if principal is None:
        raise AuthenticationException(message="Authentication required")
    return principal


async def require_admin(
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
) -> AuthenticatedPrincipal:
    """Require admin role"""
    return ensure_admin(principal)
