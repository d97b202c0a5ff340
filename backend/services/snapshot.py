"""
Wrapped Snapshot Cache

Once the semester's last working day arrives, the student's marks, courses
and attendance are frozen into a single snapshot so Wrapped keeps showing
the semester as it ended, even after the live data moves on.

Stored as JSON under one key:

    {
        "timestamp": 1747468800000,          # epoch ms of the write
        "semesterId": "2025-1",
        "lastWorkingDayDate": "17-05-2025",
        "data": {"marks": [...], "courses": [...], "attendance": [...]}
    }

A snapshot is only handed back when its semesterId matches the caller's.
Writes overwrite unconditionally; nothing here ever deletes an entry.
"""

import json
from typing import Any, Dict, List, Optional

from core.calendar import CalendarDay
from core.clock import Clock, SystemClock
from core.semester import semester_id
from services.cache import KeyValueStore, WRAPPED_CACHE_KEY

DATA_FIELDS = ("marks", "courses", "attendance")


class SnapshotCache:
    """Semester-partitioned snapshot of the Wrapped data set"""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        key: str = WRAPPED_CACHE_KEY
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.key = key

    def write(
        self,
        marks: List[Dict[str, Any]],
        courses: List[Dict[str, Any]],
        attendance: List[Dict[str, Any]],
        last_working_day: CalendarDay,
        month_label: Optional[str] = None
    ) -> bool:
        """
        Persist a snapshot for the last working day's semester.

        Returns:
            True if stored, False if the store rejected it (never raises)
        """
        now = self.clock.now()
        entry = {
            "timestamp": self.clock.epoch_ms(),
            "semesterId": semester_id(last_working_day, month_label, now=now),
            "lastWorkingDayDate": last_working_day.date,
            "data": {
                "marks": list(marks),
                "courses": list(courses),
                "attendance": list(attendance)
            }
        }

        try:
            stored = self.store.set(self.key, json.dumps(entry))
        except Exception as e:
            print(f"[SNAPSHOT] Error caching wrapped data: {e}")
            return False

        if stored:
            print(f"[SNAPSHOT] Cached {len(entry['data']['marks'])} marks, "
                  f"{len(entry['data']['courses'])} courses, "
                  f"{len(entry['data']['attendance'])} attendance records for {entry['semesterId']}")
        else:
            print(f"[SNAPSHOT] Store rejected snapshot for {entry['semesterId']}")
        return bool(stored)

    def peek(self) -> Optional[Dict[str, Any]]:
        """Raw stored entry regardless of semester, or None"""
        try:
            raw = self.store.get(self.key)
        except Exception as e:
            print(f"[SNAPSHOT] Error retrieving wrapped data: {e}")
            return None

        if not raw:
            return None

        try:
            entry = json.loads(raw)
        except (TypeError, ValueError) as e:
            print(f"[SNAPSHOT] Discarding unreadable snapshot: {e}")
            return None

        if not isinstance(entry, dict) or not isinstance(entry.get("data"), dict):
            print("[SNAPSHOT] Discarding malformed snapshot")
            return None

        data = entry["data"]
        if any(not isinstance(data.get(name, []), list) for name in DATA_FIELDS):
            print("[SNAPSHOT] Discarding snapshot with non-list data fields")
            return None
        return entry

    def read(
        self,
        last_working_day: Optional[CalendarDay],
        month_label: Optional[str] = None
    ) -> Optional[Dict[str, List[Dict[str, Any]]]]:
        """
        Return the cached data set if it belongs to the current semester.

        Returns:
            {"marks": [...], "courses": [...], "attendance": [...]} or None
        """
        entry = self.peek()
        if entry is None:
            return None

        current = semester_id(last_working_day, month_label, now=self.clock.now())
        if entry.get("semesterId") != current:
            return None

        data = entry["data"]
        return {name: data.get(name, []) for name in DATA_FIELDS}
