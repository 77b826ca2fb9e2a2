"""Conversions between tenant-local date-times and stored UTC instants."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ValidationError


def resolve_zone(zone_key: str) -> ZoneInfo:
    """Look up an IANA time zone, failing with a validation error if unknown."""
    try:
        return ZoneInfo(zone_key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(
            "timezone", zone_key, "is not a known time zone", "UNKNOWN_TIME_ZONE"
        ) from e


def to_instant(local_date_time: datetime, zone: ZoneInfo) -> datetime:
    """
    Interpret a naive local date-time in ``zone`` and return it as UTC.

    Ambiguous wall times resolve to the earlier offset. Wall times inside a
    gap use the offset in force before the transition, so they land after it.
    """
    return local_date_time.replace(tzinfo=zone, fold=0).astimezone(timezone.utc)


def to_local(instant: datetime, zone: ZoneInfo) -> datetime:
    """Project an aware instant onto the naive wall clock of ``zone``."""
    return instant.astimezone(zone).replace(tzinfo=None, fold=0)
