"""
Schedule API Routes - Current action, forced refresh and diagnostics
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from hue_schedule.api.dependencies import get_schedule_cache
from hue_schedule.api.schemas import DebugResponse, NowResponse, RefreshResponse
from hue_schedule.control.schedule_cache import ScheduleCache
from hue_schedule.errors import InstantOutOfRange

router = APIRouter()


def _localize(instant: Optional[datetime], cache: ScheduleCache) -> Optional[datetime]:
    """Naive instants are read as wall-clock time in the schedule timezone"""
    if instant is None:
        return None
    if instant.tzinfo is None:
        return instant.replace(tzinfo=cache.timezone)
    return instant.astimezone(cache.timezone)


def _requested_out_of_range(exc: InstantOutOfRange) -> JSONResponse:
    """A client-supplied instant outside the cached schedule is a bad request"""
    return JSONResponse(
        status_code=422,
        content={"error": {"name": type(exc).__name__, "message": str(exc)}},
    )


@router.get("/now", response_model=NowResponse)
async def get_now(
    at: Optional[datetime] = Query(
        None,
        description=(
            "Instant to evaluate (ISO 8601); defaults to the current time. "
            "Instants before the cached schedule's first point are rejected with 422."
        ),
    ),
    cache: ScheduleCache = Depends(get_schedule_cache),
):
    """What the lights should be doing at the given instant"""
    try:
        current = await cache.get_current_action(_localize(at, cache))
    except InstantOutOfRange as e:
        if at is None:
            raise
        return _requested_out_of_range(e)
    return NowResponse.from_current(current)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(cache: ScheduleCache = Depends(get_schedule_cache)):
    """Re-resolve today's schedule, e.g. after editing the schedule file"""
    schedule = await cache.force_refresh()
    return RefreshResponse(first=schedule[0].time, expires=schedule[-1].time)


@router.get("/debug", response_model=DebugResponse)
async def get_debug(
    at: Optional[datetime] = Query(None, description="Instant to evaluate (ISO 8601)"),
    cache: ScheduleCache = Depends(get_schedule_cache),
):
    """Raw and resolved schedule with the points surrounding the instant"""
    try:
        snapshot = await cache.get_debug_snapshot(_localize(at, cache))
    except InstantOutOfRange as e:
        if at is None:
            raise
        return _requested_out_of_range(e)
    return DebugResponse.from_snapshot(snapshot)
