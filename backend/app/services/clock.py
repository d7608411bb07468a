"""Time sources for calculations and rule generation."""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


class SystemClock:
    """Wall clock. ``today()`` is local to ``tz_name`` when given, else the host zone."""

    def __init__(self, tz_name: Optional[str] = None):
        self._tz = ZoneInfo(tz_name) if tz_name else None

    def today(self) -> date:
        if self._tz is None:
            return date.today()
        return datetime.now(self._tz).date()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    def __init__(self, today: date, now: Optional[datetime] = None):
        self._today = today
        self._now = now or datetime(today.year, today.month, today.day, tzinfo=timezone.utc)

    def today(self) -> date:
        return self._today

    def now(self) -> datetime:
        return self._now
