"""
Timestamp helpers.

Timestamps are integer epoch milliseconds (UTC) everywhere in the domain,
so ordering never depends on string formatting.
"""

import math
from datetime import datetime, timezone
from typing import Any

from .constants import MS_PER_DAY
from .errors import InvalidArgumentError

Timestamp = int


def to_epoch_ms(value: Any) -> Timestamp:
    """
    Normalize a datetime, ISO-8601 string or integer into epoch milliseconds.

    Naive datetimes are taken to be UTC.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Malformed timestamp: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidArgumentError(f"Malformed timestamp: {value!r}") from e
        return to_epoch_ms(parsed)
    raise InvalidArgumentError(f"Malformed timestamp: {value!r}")


def from_epoch_ms(ts: Timestamp) -> datetime:
    return datetime.fromtimestamp(ts / 1000, tz=timezone.utc)


def to_iso(ts: Timestamp) -> str:
    """Fixed-width UTC rendering, e.g. 2024-03-01T08:00:00.000Z."""
    return from_epoch_ms(ts).strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts % 1000:03d}Z"


def add_days(ts: Timestamp, days: int | float) -> Timestamp:
    return ts + int(round(days * MS_PER_DAY))


def days_until(target: Timestamp, now: Timestamp) -> int:
    """Whole days from now until target, rounded up (negative when overdue)."""
    return math.ceil((target - now) / MS_PER_DAY)
