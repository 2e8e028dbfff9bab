from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4


def get_correlation_id() -> str:
    """Correlation id attached to every error body and its log line"""
    return str(uuid4())


def format_error_response(
    message: str,
    status_code: int = 500,
    error_code: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra
) -> Dict[str, Any]:
    """{success: false, error, error_code, correlation_id, timestamp} plus any extra keys"""
    body = {
        "success": False,
        "error": message,
        "error_code": error_code or f"ERR_{status_code}",
        "correlation_id": correlation_id or get_correlation_id(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    body.update(extra)
    return body
