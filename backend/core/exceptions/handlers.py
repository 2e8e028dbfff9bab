from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
import logging

from .api_exceptions import APIException
from .utils import get_correlation_id, format_error_response

logger = logging.getLogger(__name__)


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Render any APIException as the shared error envelope"""
    if exc.status_code >= 500:
        logger.error("%s [%s] on %s: %s", exc.error_code, exc.correlation_id, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle standard HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error_response(
            str(exc.detail),
            status_code=exc.status_code,
            error_code=f"HTTP_{exc.status_code}"
        ),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400 Bad Request"""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"][1:])  # Skip 'body' / 'query' prefix
        errors[field or "body"] = error["msg"]

    return JSONResponse(
        status_code=400,
        content=format_error_response(
            "Validation failed",
            status_code=400,
            error_code="VALIDATION_ERROR",
            errors=errors
        )
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy database errors"""
    correlation_id = get_correlation_id()
    logger.exception("Database error [%s] on %s", correlation_id, request.url.path)

    return JSONResponse(
        status_code=500,
        content=format_error_response(
            "A database error occurred",
            status_code=500,
            error_code="DATABASE_ERROR",
            correlation_id=correlation_id
        )
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    correlation_id = get_correlation_id()
    logger.exception("Unexpected error [%s] on %s", correlation_id, request.url.path)

    return JSONResponse(
        status_code=500,
        content=format_error_response(
            "An unexpected error occurred",
            status_code=500,
            error_code="INTERNAL_ERROR",
            correlation_id=correlation_id
        )
    )
