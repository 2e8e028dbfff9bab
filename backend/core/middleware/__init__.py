"""
Middleware package for FastAPI application
"""
from .auth_context import AuthContextMiddleware

__all__ = [
    "AuthContextMiddleware",
]
