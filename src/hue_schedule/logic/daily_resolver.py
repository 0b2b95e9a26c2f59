"""
Daily Resolver

Places every change point of a schedule definition on one calendar day and
closes the day with a repeat of the first point 24 hours later, so that
every instant between the first point and the next day's first point has
a point before and after it.
"""
from datetime import datetime, timedelta
from typing import List, Optional

import structlog

from hue_schedule.errors import (
    AmbiguousOrNonexistentLocalTime,
    InvalidTimeOfDay,
    ScheduleError,
    SunsetResolutionFailed,
    TimeOfDayResolutionFailed,
    UnsortedSchedule,
)
from hue_schedule.logic.sunset import SunsetProvider, sunset_time
from hue_schedule.logic.time_resolver import resolve_time_of_day, shift, to_utc
from hue_schedule.models import (
    Anchor,
    DailySchedule,
    RawChangePoint,
    ResolvedChangePoint,
    ScheduleDefinition,
)

logger = structlog.get_logger(__name__)

DAY = timedelta(days=1)


def resolve_day(
    definition: ScheduleDefinition,
    reference: datetime,
    sunset_provider: SunsetProvider = sunset_time,
) -> DailySchedule:
    """
    Resolve a schedule definition for the calendar day of reference

    Args:
        definition: Loaded schedule definition
        reference: Any instant on the day to resolve
        sunset_provider: Sunset lookup, only called when a point is sunset-anchored

    Returns:
        Tuple of resolved points, one per raw point plus the closing repeat

    Raises:
        SunsetResolutionFailed: sunset lookup failed
        TimeOfDayResolutionFailed: an absolute point is not a valid local time
        UnsortedSchedule: resolved points go backward in time
    """
    tz = definition.timezone
    today = reference.astimezone(tz).date()

    sunset: Optional[datetime] = None
    if any(point.anchor is Anchor.SUNSET for point in definition.points):
        location = definition.location
        try:
            sunset = sunset_provider(location.latitude, location.longitude, tz, reference)
        except ScheduleError as e:
            raise SunsetResolutionFailed(reference, str(e)) from e

    resolved: List[ResolvedChangePoint] = []
    for index, point in enumerate(definition.points):
        resolved.append(
            ResolvedChangePoint(
                time=_resolve_point(point, index, today, tz, sunset),
                change=point.change,
            )
        )

    first = resolved[0]
    resolved.append(ResolvedChangePoint(time=shift(first.time, DAY), change=first.change))

    for index in range(len(resolved) - 1):
        before = resolved[index].time
        after = resolved[index + 1].time
        if to_utc(before) > to_utc(after):
            raise UnsortedSchedule(index, before, after)

    logger.info(
        "schedule_resolved",
        date=today.isoformat(),
        points=len(resolved),
        sunset=sunset.isoformat() if sunset else None,
        first=resolved[0].time.isoformat(),
        last=resolved[-1].time.isoformat(),
    )

    return tuple(resolved)


def _resolve_point(point: RawChangePoint, index: int, today, tz, sunset) -> datetime:
    """Absolute time of a single raw point"""
    if point.anchor is Anchor.SUNSET:
        return shift(sunset, timedelta(hours=point.hour, minutes=point.minute))

    try:
        return resolve_time_of_day(tz, today, point.hour, point.minute)
    except (InvalidTimeOfDay, AmbiguousOrNonexistentLocalTime) as e:
        raise TimeOfDayResolutionFailed(index, today, str(e)) from e
