import time
from datetime import datetime, timezone


def now_ts() -> int:
    """Current time as integer epoch seconds, the unit every page timestamp is stored in."""
    return int(time.time())


def to_datetime(ts):
    """
    Convert a stored epoch value into an aware UTC datetime.

    Null and zero are treated as "not set".
    """
    if not ts:
        return None
    return datetime.fromtimestamp(int(ts), tz=timezone.utc)


def to_timestamp(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
