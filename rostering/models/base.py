"""Base enums and column types for rostering SQLModel classes."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.types import TypeDecorator


class AvailabilityState(str, Enum):
    """Employee availability state matching SQL schema."""

    UNAVAILABLE = "UNAVAILABLE"
    DESIRED = "DESIRED"
    UNDESIRED = "UNDESIRED"


class UTCDateTime(TypeDecorator):
    """
    Timestamp column holding absolute instants.

    Aware datetimes are stored as naive UTC and come back as aware UTC, so
    backends without time zone support (SQLite) round-trip instants exactly.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("UTCDateTime columns require timezone-aware datetimes")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


def version_column() -> Column:
    """
    Optimistic-lock counter column.

    Each table needs its own Column instance; pass it both as the field's
    ``sa_column`` and as ``version_id_col`` in ``__mapper_args__``.
    """
    return Column("version", Integer, nullable=False)
