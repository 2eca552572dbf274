"""
Clock and Time Windows

Supplies the reference instant for an analysis pass and calendar-relative
boundaries around it.

Usage:
    from networkcrm.utils.clock import FixedClock

    window = FixedClock(datetime(2024, 6, 1)).window()
    window.days_ago(30), window.months_ago(3)
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

import pandas as pd


def normalize_instant(value: Optional[datetime]) -> Optional[datetime]:
    """Convert timezone-aware datetimes to naive local time.

    All instants in one pass are compared against each other, so they must
    share the same (naive) representation.
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def whole_days(delta: timedelta) -> int:
    """Whole days in ``delta``, truncated toward zero.

    ``timedelta.days`` floors, so minus twelve hours would count as -1.
    """
    return int(delta / timedelta(days=1))


class TimeWindow:
    """Calendar arithmetic relative to a fixed reference instant."""

    def __init__(self, now: datetime):
        self.now = normalize_instant(now)

    def days_ago(self, days: int) -> datetime:
        return self.now - timedelta(days=days)

    def days_ahead(self, days: int) -> datetime:
        return self.now + timedelta(days=days)

    def weeks_ago(self, weeks: int) -> datetime:
        return self.now - timedelta(weeks=weeks)

    def months_ago(self, months: int) -> datetime:
        """Step back whole calendar months, clamping the day of month.

        March 31 minus one month is the last day of February.
        """
        shifted = pd.Timestamp(self.now) - pd.DateOffset(months=months)
        return shifted.to_pydatetime()

    def elapsed_days(self, since: datetime) -> int:
        """Whole days from ``since`` to now (negative if ``since`` is later)."""
        return whole_days(self.now - since)


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant."""
        pass

    def window(self) -> TimeWindow:
        """Freeze the current instant into a TimeWindow."""
        return TimeWindow(self.now())


class SystemClock(Clock):
    """Wall-clock time in the local timezone."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Always returns the same instant. Used for reports pinned to a date and in tests."""

    def __init__(self, instant: datetime):
        self._instant = normalize_instant(instant)

    def now(self) -> datetime:
        return self._instant
