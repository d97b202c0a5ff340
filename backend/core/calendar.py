"""
Academic calendar data structures.

The calendar arrives from the fetch layer as a list of months:

    [{"month": "May'25", "days": [{"date": "17", "day": "Sat",
                                   "dayOrder": "-", "event": "Last Working Day"}]}]

Days keep the order they were sent in; nothing here sorts or validates dates.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CalendarDay:
    """One day of the academic calendar."""
    date: str                       # "17-05-2025" or bare day-of-month "17"
    day_order: str = ""
    event: Optional[str] = None     # free text, e.g. "Last Working Day"
    day: Optional[str] = None       # weekday name, carried through

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDay":
        event = data.get("event")
        return cls(
            date=str(data.get("date", "")).strip(),
            day_order=str(data.get("dayOrder", data.get("day_order", "")) or ""),
            event=str(event) if event else None,
            day=data.get("day"),
        )

    def has_event(self, *phrases: str) -> bool:
        """Case-sensitive substring match against any of the phrases."""
        if not self.event:
            return False
        return any(phrase in self.event for phrase in phrases)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"date": self.date, "dayOrder": self.day_order}
        if self.day is not None:
            result["day"] = self.day
        if self.event is not None:
            result["event"] = self.event
        return result


@dataclass(frozen=True)
class CalendarMonth:
    """A labelled month ("May'25") and its days in the order supplied."""
    month: str
    days: List[CalendarDay] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarMonth":
        return cls(
            month=str(data.get("month", "")),
            days=[CalendarDay.from_dict(d) for d in data.get("days", []) or []],
        )


def parse_calendar(payload: Optional[List[Dict[str, Any]]]) -> List[CalendarMonth]:
    """Build CalendarMonth objects from the fetch layer's JSON list."""
    if not payload:
        return []
    return [CalendarMonth.from_dict(m) for m in payload]
