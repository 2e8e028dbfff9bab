from .jwt_auth import JWTManager

__all__ = ["JWTManager"]
