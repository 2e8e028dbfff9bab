from fastapi import HTTPException
from typing import Any, Dict, Optional

from .utils import format_error_response, get_correlation_id


class APIException(HTTPException):
    """Base for every error the API reports on purpose"""

    def __init__(
        self,
        status_code: int,
        message: str = "An unexpected API error occurred",
        error_code: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **kwargs
    ):
        self.message = message
        self.error_code = error_code or f"ERR_{status_code}"
        self.correlation_id = correlation_id or get_correlation_id()
        super().__init__(status_code=status_code, detail=message, **kwargs)

    def extra_fields(self) -> Dict[str, Any]:
        return {}

    def to_payload(self, **extra) -> Dict[str, Any]:
        """Error envelope for this exception; ``extra`` keys are merged in"""
        return format_error_response(
            self.message,
            status_code=self.status_code,
            error_code=self.error_code,
            correlation_id=self.correlation_id,
            **{**self.extra_fields(), **extra}
        )


class ValidationException(APIException):
    """Missing or invalid input fields"""

    def __init__(self, message: str = "Validation failed", errors: Optional[Dict[str, Any]] = None):
        self.errors = errors or {}
        super().__init__(status_code=400, message=message, error_code="VALIDATION_ERROR")

    def extra_fields(self) -> Dict[str, Any]:
        return {"errors": self.errors} if self.errors else {}


class AuthenticationException(APIException):
    """No session cookie, or one that failed verification"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(status_code=401, message=message, error_code="AUTH_ERROR")


class AuthorizationException(APIException):
    """Signed in, but not allowed: non-admin on admin routes, banned accounts"""

    def __init__(self, message: str = "Access denied"):
        super().__init__(status_code=403, message=message, error_code="AUTHORIZATION_ERROR")


class NotFoundException(APIException):

    def __init__(self, message: str = "Resource not found"):
        super().__init__(status_code=404, message=message, error_code="NOT_FOUND")


class ConflictException(APIException):
    """Duplicate email, booked appointment slot"""

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(status_code=409, message=message, error_code="CONFLICT_ERROR")


class DatabaseException(APIException):
    """Store unreachable or constraint violation"""

    def __init__(self, message: str = "Database error occurred"):
        super().__init__(status_code=500, message=message, error_code="DATABASE_ERROR")


class CodeGenerationExhaustedException(APIException):
    """Every attempt of a bounded code generation collided"""

    def __init__(self, message: str = "Could not generate a unique code", attempts: int = 0):
        self.attempts = attempts
        super().__init__(status_code=500, message=message, error_code="CODE_GENERATION_EXHAUSTED")

    def extra_fields(self) -> Dict[str, Any]:
        return {"attempts": self.attempts}


class ExpiredCheckinCodeException(APIException):
    """Check-in code that is not valid for the current gym-local day"""

    def __init__(self, message: str = "QR code expired"):
        super().__init__(status_code=400, message=message, error_code="CHECKIN_CODE_EXPIRED")
