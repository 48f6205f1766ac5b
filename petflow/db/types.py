import calendar
from datetime import datetime, timezone

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator


class EpochDateTime(TypeDecorator):
    """Stores datetimes as integer epoch seconds.

    Values come back as naive UTC datetimes. Aware datetimes are converted to
    UTC before storing; naive ones are assumed to already be UTC.
    """

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, (int, float)):
            return int(value)
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return calendar.timegm(value.utctimetuple())

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return datetime.fromtimestamp(int(value), tz=timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
