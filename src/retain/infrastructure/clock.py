"""Clock adapters."""

import time
from datetime import date, datetime, timezone

from retain.domain.ports import Clock
from retain.domain.timeutils import Timestamp, add_days, from_epoch_ms, to_epoch_ms


class SystemClock(Clock):
    """Wall-clock time; calendar dates in the local timezone."""

    def now(self) -> Timestamp:
        return time.time_ns() // 1_000_000

    def today(self) -> date:
        return date.today()

    def date_of(self, ts: Timestamp) -> date:
        return date.fromtimestamp(ts / 1000)


class FixedClock(Clock):
    """
    A clock that only moves when told to.

    Calendar dates are taken in the given timezone (UTC by default).
    """

    def __init__(self, start: Timestamp | datetime | str, tz: timezone = timezone.utc):
        self._now = to_epoch_ms(start)
        self._tz = tz

    def now(self) -> Timestamp:
        return self._now

    def today(self) -> date:
        return self.date_of(self._now)

    def date_of(self, ts: Timestamp) -> date:
        return from_epoch_ms(ts).astimezone(self._tz).date()

    def advance(self, days: float = 0, hours: float = 0) -> Timestamp:
        self._now = add_days(self._now, days + hours / 24)
        return self._now

    def set(self, value: Timestamp | datetime | str) -> None:
        self._now = to_epoch_ms(value)

    def __repr__(self) -> str:
        moment = from_epoch_ms(self._now).astimezone(self._tz)
        return f"FixedClock({moment.isoformat()})"
