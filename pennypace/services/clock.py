"""Wall-clock helpers. Stored datetimes are UTC; periods use settings.timezone."""

from datetime import datetime, timezone

from pennypace.config import settings


def now_local() -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(settings.tz)


def ensure_tz(dt: datetime) -> datetime:
    """SQLite returns naive datetimes; normalize to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_utc(dt: datetime) -> datetime:
    return ensure_tz(dt).astimezone(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    """``now`` in the configured timezone; defaults to the current time."""
    if now is None:
        return now_local()
    return ensure_tz(now).astimezone(settings.tz)
