from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def as_utc(value: datetime) -> datetime:
    """
    Normalise a datetime to aware UTC before it is stored; naive values are
    taken as UTC. A naive value sent to a timestamptz column would otherwise be
    read in the database session's zone.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_timezone(name: Optional[str], default: str) -> ZoneInfo:
    """IANA zone by name (falls back to `default`). Raises ValueError if unknown."""
    try:
        return ZoneInfo(name or default)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # OSError covers tzdata directories such as "America"
        raise ValueError(f"Unknown time zone: {name or default}") from e
