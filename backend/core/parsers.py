"""
Shared parsing utilities for calendar dates and month labels.

Two date shapes come out of the academic calendar:
- full dates: "17-05-2025" (DD-MM-YYYY)
- bare day numbers: "17", which only make sense next to a month label
  such as "May'25" (month name + optional 2-digit year)

None of these helpers raise; unparsable input returns None.
"""

from datetime import date
from typing import Optional, Tuple

MONTH_INDEX = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12
}


def parse_month_label(label: Optional[str]) -> Optional[Tuple[int, Optional[int]]]:
    """
    Parse a calendar month label.

    Args:
        label: e.g. "May'25", "December", "may ' 24"

    Returns:
        (month 1-12, four-digit year or None) or None for an unknown month name.
        The year is None when the suffix is missing or not in 0-99.
    """
    if not label:
        return None

    parts = label.split("'")
    month = MONTH_INDEX.get(parts[0].strip().lower())
    if month is None:
        return None

    year = None
    if len(parts) > 1:
        suffix = parts[1].strip()
        if suffix.isdigit():
            suffix_num = int(suffix)
            if 0 <= suffix_num <= 99:
                year = 2000 + suffix_num

    return month, year


def parse_full_date(token: str) -> Optional[Tuple[int, int, int]]:
    """Split "DD-MM-YYYY" into (day, month, year) integers."""
    parts = token.strip().split("-")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p) for p in parts)
    except ValueError:
        return None
    return day, month, year


def parse_calendar_date(
    token: str,
    month_label: Optional[str] = None,
    today: Optional[date] = None
) -> Optional[date]:
    """
    Turn a calendar day token into a date.

    Args:
        token: "DD-MM-YYYY" or a bare day-of-month
        month_label: month context for bare day numbers
        today: supplies the year when the label has no year suffix

    Returns:
        The date, or None if there is not enough (or invalid) information
    """
    if not token:
        return None

    if "-" in token:
        parsed = parse_full_date(token)
        if parsed is None:
            print(f"[PARSE] Malformed date: {token!r}")
            return None
        day, month, year = parsed
        try:
            return date(year, month, day)
        except ValueError:
            print(f"[PARSE] Impossible date: {token!r}")
            return None

    if not month_label:
        print(f"[PARSE] Unable to parse date - no month context: {token!r}")
        return None

    label = parse_month_label(month_label)
    if label is None:
        print(f"[PARSE] Unknown month name: {month_label!r}")
        return None

    month, year = label
    if year is None:
        year = (today or date.today()).year

    try:
        return date(year, month, int(token.strip()))
    except ValueError:
        print(f"[PARSE] Failed to parse date: {token!r} in {month_label!r}")
        return None
