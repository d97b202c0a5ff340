"""
Wrapped Availability

ClassPro Wrapped unlocks on the semester's last working day and stays open
for WRAPPED_WINDOW_DAYS (30) days, both ends inclusive:

    [last working day, last working day + 30 days]

Before the window the verdict carries a countdown to the last working day;
inside it, the days left in the window. Any doubt about the calendar
(empty, no usable day, unparsable date) keeps Wrapped locked.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from core.calendar import CalendarDay, CalendarMonth
from core.clock import Clock, SystemClock
from core.config import WRAPPED_WINDOW_DAYS
from core.parsers import parse_calendar_date

# Events that mark the last working day itself
LAST_DAY_EVENTS = ("Last Working Day", "End of Semester", "Last Day of Classes")

# Events that start right after the last working day
POST_TEACHING_EVENTS = ("Examination Begins", "Final Exams Begin", "End of Teaching Period")


@dataclass
class AvailabilityVerdict:
    """Result of an availability check"""
    is_available: bool
    days_remaining: Optional[int] = None
    days_until_last_working_day: Optional[int] = None
    last_working_day: Optional[CalendarDay] = None
    month: Optional[str] = None     # label of the month holding last_working_day

    def to_dict(self) -> Dict[str, Any]:
        """Wire format; absent fields are omitted."""
        result: Dict[str, Any] = {"isAvailable": self.is_available}
        if self.days_remaining is not None:
            result["daysRemaining"] = self.days_remaining
        if self.days_until_last_working_day is not None:
            result["daysUntilLastWorkingDay"] = self.days_until_last_working_day
        if self.last_working_day is not None:
            result["lastWorkingDay"] = self.last_working_day.to_dict()
        return result


def locate_last_working_day(
    calendar: List[CalendarMonth]
) -> Optional[Tuple[CalendarDay, str]]:
    """
    Find the semester's last working day.

    Scans months, then days, in the order given:
    1. first day tagged with a LAST_DAY_EVENTS phrase
    2. else the day listed just before the first POST_TEACHING_EVENTS day
       in the same month (the event day itself if it is listed first)
    3. else the last day of the last month

    Rule 2 goes by list position, not by date, so it relies on each month's
    days being in chronological order.

    Returns:
        (day, month label) or None for an empty calendar
    """
    for month in calendar:
        for day in month.days:
            if day.has_event(*LAST_DAY_EVENTS):
                return day, month.month

    for month in calendar:
        for index, day in enumerate(month.days):
            if day.has_event(*POST_TEACHING_EVENTS):
                if index > 0:
                    return month.days[index - 1], month.month
                return day, month.month

    if calendar and calendar[-1].days:
        last_month = calendar[-1]
        return last_month.days[-1], last_month.month

    return None


class AvailabilityCalculator:
    """Decides whether Wrapped is unlocked for a given calendar"""

    def __init__(self, clock: Optional[Clock] = None, window_days: int = WRAPPED_WINDOW_DAYS):
        self.clock = clock or SystemClock()
        self.window_days = window_days

    def is_available(self, calendar: List[CalendarMonth]) -> AvailabilityVerdict:
        if not calendar:
            return AvailabilityVerdict(is_available=False)

        located = locate_last_working_day(calendar)
        if located is None:
            return AvailabilityVerdict(is_available=False)

        last_working_day, month_label = located
        today = self.clock.now().date()

        last_working_date = parse_calendar_date(last_working_day.date, month_label, today=today)
        if last_working_date is None:
            print(f"[WRAPPED] Could not date last working day {last_working_day.date!r} ({month_label})")
            return AvailabilityVerdict(is_available=False)

        window_end = last_working_date + timedelta(days=self.window_days)
        available = last_working_date <= today <= window_end

        verdict = AvailabilityVerdict(
            is_available=available,
            last_working_day=last_working_day,
            month=month_label
        )

        if today < last_working_date:
            verdict.days_until_last_working_day = (last_working_date - today).days
        elif available:
            verdict.days_until_last_working_day = 0
            verdict.days_remaining = (window_end - today).days

        return verdict


def is_wrapped_available(
    calendar: List[CalendarMonth],
    clock: Optional[Clock] = None
) -> AvailabilityVerdict:
    """Convenience function using the configured window"""
    return AvailabilityCalculator(clock=clock).is_available(calendar)
