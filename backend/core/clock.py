"""
Clock providers.

Everything that needs "now" takes a clock instead of calling datetime.now()
directly, so availability and semester logic can be pinned to any date.

now() is a naive campus-local datetime for calendar arithmetic.
epoch_ms() is the same instant as Unix epoch milliseconds.
"""

from datetime import date, datetime
from typing import Protocol, Union
from zoneinfo import ZoneInfo

from core.config import CLASSPRO_TIMEZONE


class Clock(Protocol):
    def now(self) -> datetime:
        ...

    def epoch_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time in the campus timezone, as a naive local datetime."""

    def __init__(self, tz_name: str = CLASSPRO_TIMEZONE):
        self.tz_name = tz_name
        self._tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self._tz).replace(tzinfo=None)

    def epoch_ms(self) -> int:
        return int(datetime.now(self._tz).timestamp() * 1000)


class FixedClock:
    """
    Always returns the same moment. Accepts a date, datetime or ISO string.

    Naive input is campus-local time. Input carrying a UTC offset is
    converted to the campus timezone first, so "2025-05-16T20:00:00+00:00"
    pins 17 May 01:30 in Asia/Kolkata.
    """

    def __init__(self, moment: Union[date, datetime, str], tz_name: str = CLASSPRO_TIMEZONE):
        tz = ZoneInfo(tz_name)
        if isinstance(moment, str):
            moment = datetime.fromisoformat(moment)
        elif not isinstance(moment, datetime):
            moment = datetime(moment.year, moment.month, moment.day)

        if moment.tzinfo is None:
            self._aware = moment.replace(tzinfo=tz)
        else:
            self._aware = moment.astimezone(tz)
        self._moment = self._aware.replace(tzinfo=None)

    def now(self) -> datetime:
        return self._moment

    def epoch_ms(self) -> int:
        return int(self._aware.timestamp() * 1000)
