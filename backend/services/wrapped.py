"""
ClassPro Wrapped Service

Ties availability, the semester snapshot and the "viewed" record together
for the API:

- availability: is Wrapped unlocked, and for how long
- resolve: which marks/courses/attendance Wrapped should show
  (the frozen snapshot if this semester has one, otherwise live data,
  snapshotting it from the last working day on)
- viewed: whether the student already opened this semester's Wrapped
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.calendar import CalendarMonth
from core.clock import Clock, SystemClock
from core.config import WRAPPED_WINDOW_DAYS
from core.semester import current_semester_id
from services.availability import AvailabilityCalculator, AvailabilityVerdict
from services.cache import KeyValueStore, WRAPPED_CACHE_KEY, WRAPPED_VIEWED_KEY
from services.snapshot import SnapshotCache


@dataclass
class WrappedResolution:
    """Availability plus the data set Wrapped should render"""
    availability: AvailabilityVerdict
    data: Dict[str, List[Dict[str, Any]]] = field(
        default_factory=lambda: {"marks": [], "courses": [], "attendance": []}
    )
    source: Optional[str] = None        # "cache" | "live" | None
    is_data_loaded: bool = False
    cached_now: bool = False


class WrappedService:
    """Wrapped availability, data resolution and view tracking"""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        window_days: int = WRAPPED_WINDOW_DAYS,
        cache_key: str = WRAPPED_CACHE_KEY,
        viewed_key: str = WRAPPED_VIEWED_KEY
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.calculator = AvailabilityCalculator(clock=self.clock, window_days=window_days)
        self.snapshots = SnapshotCache(store, clock=self.clock, key=cache_key)
        self.viewed_key = viewed_key

    def availability(self, calendar: List[CalendarMonth]) -> AvailabilityVerdict:
        return self.calculator.is_available(calendar)

    def resolve(
        self,
        calendar: List[CalendarMonth],
        marks: List[Dict[str, Any]],
        courses: List[Dict[str, Any]],
        attendance: List[Dict[str, Any]]
    ) -> WrappedResolution:
        """
        Pick the data set for Wrapped.

        A snapshot for the current semester always wins. Without one, the
        live data is used, and frozen into a snapshot when the last working
        day is today or already behind us inside the window.
        """
        verdict = self.availability(calendar)
        resolution = WrappedResolution(availability=verdict)

        if verdict.last_working_day is None:
            return resolution

        cached = self.snapshots.read(verdict.last_working_day, verdict.month)
        if cached is not None:
            print("[WRAPPED] Using cached Wrapped data from previous snapshot")
            resolution.data = cached
            resolution.source = "cache"
            resolution.is_data_loaded = True
            return resolution

        resolution.data = {
            "marks": list(marks),
            "courses": list(courses),
            "attendance": list(attendance)
        }
        resolution.source = "live"
        resolution.is_data_loaded = True

        if verdict.days_until_last_working_day == 0:
            print("[WRAPPED] Caching Wrapped data snapshot for this semester")
            resolution.cached_now = self.snapshots.write(
                marks, courses, attendance, verdict.last_working_day, verdict.month
            )

        return resolution

    def has_viewed(self) -> bool:
        """True if Wrapped was already opened during the current semester"""
        try:
            raw = self.store.get(self.viewed_key)
            if not raw:
                return False
            record = json.loads(raw)
        except Exception as e:
            print(f"[WRAPPED] Error reading wrapped view status: {e}")
            return False

        if not isinstance(record, dict):
            return False
        return record.get("semesterId") == current_semester_id(self.clock.now())

    def mark_viewed(self, viewed: bool = True) -> bool:
        """
        Record that Wrapped was opened this semester.

        Marking as not viewed only affects the caller's state; the stored
        record is left alone.
        """
        if not viewed:
            return False

        now = self.clock.now()
        record = {
            "semesterId": current_semester_id(now),
            "viewedAt": now.isoformat()
        }
        try:
            return bool(self.store.set(self.viewed_key, json.dumps(record)))
        except Exception as e:
            print(f"[WRAPPED] Error saving wrapped view status: {e}")
            return False

    def should_prompt(self, is_available: bool) -> bool:
        """Prompt only while Wrapped is open and not yet viewed this semester"""
        return is_available and not self.has_viewed()
