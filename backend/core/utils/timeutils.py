from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from core.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Naive datetimes (as returned by SQLite) are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def gym_zone() -> ZoneInfo:
    return ZoneInfo(settings.GYM_TIMEZONE)


def gym_now() -> datetime:
    """Current wall-clock time at the gym."""
    return datetime.now(gym_zone())


def gym_today() -> date:
    return gym_now().date()


def as_utc(value: datetime) -> datetime:
    """Normalise to UTC before storing; SQLite keeps wall-clock time only."""
    return ensure_aware(value).astimezone(timezone.utc)
