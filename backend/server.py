"""
FastAPI Server for ClassPro Wrapped

Exposes Wrapped availability, snapshot-aware data resolution and
per-semester view tracking to the dashboard front end.

Usage:
    python server.py                    # Run server on port 8000
    python server.py --port 3001        # Custom port
    python server.py --reload           # Auto-reload for development

Every /api/wrapped endpoint accepts ?as_of=YYYY-MM-DD to evaluate the
calendar as if it were that day.
"""

import argparse
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from core.calendar import parse_calendar
from core.clock import Clock, FixedClock, SystemClock
from core.config import CORS_ORIGINS, WRAPPED_STORE_BACKEND, WRAPPED_WINDOW_DAYS, initialize_firebase
from core.semester import SemesterManager, current_semester_id
from services.cache import WRAPPED_CACHE_KEY, WRAPPED_VIEWED_KEY, get_store, namespaced_key
from services.snapshot import DATA_FIELDS
from services.wrapped import WrappedService


# Pydantic Models (API Schemas)

class CalendarDayModel(BaseModel):
    date: str
    day: Optional[str] = None
    dayOrder: str = ""
    event: Optional[str] = None


class CalendarMonthModel(BaseModel):
    month: str
    days: List[CalendarDayModel] = []


class AvailabilityRequest(BaseModel):
    calendar: List[CalendarMonthModel] = []


class WrappedRequest(BaseModel):
    calendar: List[CalendarMonthModel] = []
    marks: List[Dict[str, Any]] = []
    courses: List[Dict[str, Any]] = []
    attendance: List[Dict[str, Any]] = []
    student_id: Optional[str] = None


class WrappedDataModel(BaseModel):
    marks: List[Dict[str, Any]] = []
    courses: List[Dict[str, Any]] = []
    attendance: List[Dict[str, Any]] = []


class WrappedResponse(BaseModel):
    availability: Dict[str, Any]
    data: WrappedDataModel
    source: Optional[str] = None
    isDataLoaded: bool = False
    cachedNow: bool = False


class SnapshotInfoResponse(BaseModel):
    semesterId: str
    lastWorkingDayDate: str
    timestamp: int
    counts: Dict[str, int]


class ViewedRequest(BaseModel):
    viewed: bool = True
    student_id: Optional[str] = None


class ViewedResponse(BaseModel):
    semesterId: str
    hasViewed: bool
    shouldPrompt: bool = False
    stored: Optional[bool] = None


class HealthResponse(BaseModel):
    status: str
    semester_id: str
    semester: str
    window_days: int = Field(default=WRAPPED_WINDOW_DAYS)
    store_backend: str
    store: str


# App Lifespan (startup/shutdown)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown"""
    if WRAPPED_STORE_BACKEND == "firestore":
        print("[Server] Initializing Firebase...")
        initialize_firebase()

    print(f"[Server] Store backend: {WRAPPED_STORE_BACKEND}")
    print("[Server] Ready!")

    yield

    print("[Server] Shutdown complete")


# FastAPI App

app = FastAPI(
    title="ClassPro Wrapped API",
    description="Semester Wrapped availability and snapshot API for ClassPro",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Helpers

def _clock_for(as_of: Optional[str]) -> Clock:
    """SystemClock, or a FixedClock pinned to the as_of date"""
    if not as_of:
        return SystemClock()
    try:
        return FixedClock(datetime.strptime(as_of, "%Y-%m-%d"))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid as_of date (expected YYYY-MM-DD): {as_of}")


def _service_for(student_id: Optional[str], clock: Clock) -> WrappedService:
    return WrappedService(
        store=get_store(),
        clock=clock,
        cache_key=namespaced_key(WRAPPED_CACHE_KEY, student_id),
        viewed_key=namespaced_key(WRAPPED_VIEWED_KEY, student_id)
    )


def _calendar_from(models: List[CalendarMonthModel]):
    return parse_calendar([m.model_dump() for m in models])


# API Endpoints

@app.get("/", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    store_status = "unavailable"
    try:
        if getattr(get_store(), "is_connected", False):
            store_status = "connected"
    except Exception:
        store_status = "unavailable"

    info = SemesterManager.describe_current(SystemClock().now())

    return HealthResponse(
        status="ok" if store_status == "connected" else "degraded",
        semester_id=info["semester_id"],
        semester=info["display_name"],
        store_backend=WRAPPED_STORE_BACKEND,
        store=store_status
    )


@app.get("/api/health", response_model=HealthResponse)
async def api_health():
    """API health check"""
    return await health_check()


@app.get("/api/semester")
async def get_current_semester(as_of: Optional[str] = Query(None, description="Evaluate as of YYYY-MM-DD")):
    """
    Get the semester id for today (or as_of).
    """
    clock = _clock_for(as_of)
    return {"current": SemesterManager.describe_current(clock.now())}


@app.post("/api/wrapped/availability")
async def wrapped_availability(
    request: AvailabilityRequest,
    as_of: Optional[str] = Query(None, description="Evaluate as of YYYY-MM-DD")
):
    """
    Check whether Wrapped is unlocked for a calendar.
    """
    service = _service_for(None, _clock_for(as_of))
    verdict = service.availability(_calendar_from(request.calendar))
    return verdict.to_dict()


@app.post("/api/wrapped", response_model=WrappedResponse)
async def wrapped_data(
    request: WrappedRequest,
    as_of: Optional[str] = Query(None, description="Evaluate as of YYYY-MM-DD")
):
    """
    Resolve the data set Wrapped should show.

    Prefers this semester's frozen snapshot; otherwise echoes the live
    marks/courses/attendance and snapshots them from the last working day on.
    """
    service = _service_for(request.student_id, _clock_for(as_of))
    resolution = service.resolve(
        _calendar_from(request.calendar),
        request.marks,
        request.courses,
        request.attendance
    )

    return WrappedResponse(
        availability=resolution.availability.to_dict(),
        data=WrappedDataModel(**resolution.data),
        source=resolution.source,
        isDataLoaded=resolution.is_data_loaded,
        cachedNow=resolution.cached_now
    )


@app.get("/api/wrapped/cache", response_model=SnapshotInfoResponse)
async def wrapped_cache_info(student_id: Optional[str] = Query(None)):
    """
    Describe the stored snapshot (without its payload).
    """
    service = _service_for(student_id, SystemClock())
    entry = service.snapshots.peek()
    if entry is None:
        raise HTTPException(status_code=404, detail="No Wrapped snapshot stored")

    data = entry["data"]
    timestamp = entry.get("timestamp")
    return SnapshotInfoResponse(
        semesterId=str(entry.get("semesterId", "")),
        lastWorkingDayDate=str(entry.get("lastWorkingDayDate", "")),
        timestamp=timestamp if isinstance(timestamp, int) else 0,
        counts={name: len(data.get(name, [])) for name in DATA_FIELDS}
    )


@app.get("/api/wrapped/viewed", response_model=ViewedResponse)
async def wrapped_viewed_status(
    student_id: Optional[str] = Query(None),
    is_available: bool = Query(False, description="Current availability verdict"),
    as_of: Optional[str] = Query(None, description="Evaluate as of YYYY-MM-DD")
):
    """
    Whether Wrapped was already viewed this semester, and if we should prompt.
    """
    clock = _clock_for(as_of)
    service = _service_for(student_id, clock)
    return ViewedResponse(
        semesterId=current_semester_id(clock.now()),
        hasViewed=service.has_viewed(),
        shouldPrompt=service.should_prompt(is_available)
    )


@app.post("/api/wrapped/viewed", response_model=ViewedResponse)
async def mark_wrapped_viewed(
    request: ViewedRequest,
    as_of: Optional[str] = Query(None, description="Evaluate as of YYYY-MM-DD")
):
    """
    Mark this semester's Wrapped as viewed.
    """
    clock = _clock_for(as_of)
    service = _service_for(request.student_id, clock)
    stored = service.mark_viewed(request.viewed)
    return ViewedResponse(
        semesterId=current_semester_id(clock.now()),
        hasViewed=request.viewed,
        stored=stored
    )


# Main

def main():
    import uvicorn

    parser = argparse.ArgumentParser(description="ClassPro Wrapped API Server")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    args = parser.parse_args()

    print(f"[Server] Starting on http://{args.host}:{args.port}")

    uvicorn.run(
        "server:app" if args.reload else app,
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
