"""
JSON event logging for business events (promotions, check-ins, logins)
"""
import logging
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StructuredLogger:
    """
    Emits one JSON document per event so promotion, check-in and auth events
    can be filtered by their metadata downstream.
    """

    def __init__(self, name: str = "gym.events", service: str = "gym-api"):
        self.logger = logging.getLogger(name)
        self.service = service

    def _entry(
        self,
        level: int,
        message: str,
        user_id: Optional[str],
        endpoint: Optional[str],
        metadata: Optional[Dict[str, Any]],
        exception: Optional[BaseException],
    ) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "service": self.service,
            "message": message,
        }
        optional = {"user_id": user_id, "endpoint": endpoint, "metadata": metadata}
        entry.update({key: value for key, value in optional.items() if value})
        if exception is not None:
            entry["exception"] = {"type": type(exception).__name__, "message": str(exception)}
        return entry

    def log(
        self,
        level: int,
        message: str,
        user_id: Optional[str] = None,
        endpoint: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        entry = self._entry(level, message, user_id, endpoint, metadata, exception)
        # Errors carry the traceback of the exception that caused them
        exc_info = exception if exception is not None and level >= logging.ERROR else None
        self.logger.log(level, json.dumps(entry, default=str), exc_info=exc_info)

    def info(self, message: str, **kwargs) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log(logging.ERROR, message, **kwargs)


structured_logger = StructuredLogger()
