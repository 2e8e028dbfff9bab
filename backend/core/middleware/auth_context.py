"""
Resolves the session cookie into request.state.principal once per request
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.auth import principal_from_token
from core.config import settings
from core.utils.auth.jwt_auth import JWTManager


class AuthContextMiddleware(BaseHTTPMiddleware):
    """Attach the AuthenticatedPrincipal (or None) to the request state"""

    def __init__(self, app: ASGIApp, cookie_name: str = None):
        super().__init__(app)
        self.cookie_name = cookie_name or settings.SESSION_COOKIE_NAME
        self.jwt_manager = JWTManager()

    async def dispatch(self, request: Request, call_next):
        token = request.cookies.get(self.cookie_name)
        request.state.principal = principal_from_token(token, self.jwt_manager)
        return await call_next(request)
