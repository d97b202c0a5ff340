"""
Semester Identity

A semester id is a coarse half-year partition key:

    "<year>-1"  for January through June
    "<year>-2"  for July through December

It is derived from the semester's last working day when one is known,
otherwise from the current date. Used to keep a cached Wrapped snapshot
(or a "viewed" flag) from leaking from one term into the next.
"""

from datetime import datetime
from typing import Dict, Optional, Union

from core.calendar import CalendarDay
from core.parsers import parse_full_date, parse_month_label


def _half(month: int) -> str:
    return "1" if month <= 6 else "2"


def current_semester_id(now: datetime) -> str:
    """Semester id for the given moment."""
    return f"{now.year}-{_half(now.month)}"


def semester_id(
    last_working_day: Optional[CalendarDay] = None,
    month_label: Optional[str] = None,
    now: Optional[datetime] = None
) -> str:
    """
    Derive the semester id for a last working day.

    Resolution order:
    1. a full DD-MM-YYYY date on the day
    2. a bare day number with a month label ("May'25"); an unknown month
       name falls back to the current month, the suffix still gives the year
    3. the current date

    Never fails.
    """
    now = now or datetime.now()
    year = now.year
    month = now.month

    if last_working_day is not None:
        if "-" in last_working_day.date:
            parsed = parse_full_date(last_working_day.date)
            if parsed is not None:
                _, month, year = parsed
        elif month_label:
            parts = month_label.split("'")
            label = parse_month_label(month_label)
            if label is not None:
                month = label[0]
            suffix = parts[1].strip() if len(parts) > 1 else ""
            if suffix.isdigit() and 0 <= int(suffix) <= 99:
                year = 2000 + int(suffix)

    return f"{year}-{_half(month)}"


class SemesterManager:
    """Helpers for presenting semester ids"""

    HALF_NAMES = {
        "1": "Jan-Jun",
        "2": "Jul-Dec"
    }

    @staticmethod
    def parse_semester_id(token: str) -> Dict[str, Union[str, int]]:
        """Parse a semester id into its components"""
        parts = token.split("-")
        if len(parts) != 2 or not parts[0].isdigit() or parts[1] not in SemesterManager.HALF_NAMES:
            raise ValueError(f"Invalid semester id: {token}")

        year = int(parts[0])
        half = parts[1]

        return {
            "year": year,
            "half": half,
            "semester_id": token,
            "display_name": f"{SemesterManager.HALF_NAMES[half]} {year}"
        }

    @staticmethod
    def describe_current(now: datetime) -> Dict[str, Union[str, int]]:
        """Components of the semester the given moment falls in"""
        return SemesterManager.parse_semester_id(current_semester_id(now))
