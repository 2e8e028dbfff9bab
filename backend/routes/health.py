# Service banner and liveness endpoint

from datetime import datetime, timezone

from fastapi import APIRouter

from core.database import get_db_health

router = APIRouter(tags=["health"])

SERVICE_NAME = "Gym API"
SERVICE_VERSION = "1.0.0"


@router.get("/")
async def read_root():
    return {
        "service": SERVICE_NAME,
        "status": "Running",
        "version": SERVICE_VERSION,
        "description": "Marketing site and back office API for the gym.",
    }


@router.get("/health")
async def health_check():
    """Liveness; the database state is reported but does not fail the check."""
    database = await get_db_health()
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database.get("status"),
    }
