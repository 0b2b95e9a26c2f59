"""
Time Resolver

Converts wall-clock times into timezone-aware instants. All arithmetic on
instants goes through UTC: Python adds timedeltas to aware datetimes in
wall-clock time and compares same-tzinfo datetimes without their offsets,
both of which are wrong across DST transitions.
"""
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from hue_schedule.errors import AmbiguousOrNonexistentLocalTime, InvalidTimeOfDay


def now(tz: ZoneInfo) -> datetime:
    """Current instant expressed in the given timezone"""
    return datetime.now(timezone.utc).astimezone(tz)


def to_utc(instant: datetime) -> datetime:
    """Normalize an aware datetime to UTC for comparison and subtraction"""
    return instant.astimezone(timezone.utc)


def shift(instant: datetime, delta: timedelta) -> datetime:
    """Move an instant by an elapsed duration, keeping its timezone"""
    return (to_utc(instant) + delta).astimezone(instant.tzinfo)


def resolve_time_of_day(tz: ZoneInfo, day: date, hour: int, minute: int) -> datetime:
    """
    Build the instant for a wall-clock hour/minute on a calendar day

    Args:
        tz: Timezone the wall-clock time is expressed in
        day: Calendar date
        hour: Hour of day (0-23)
        minute: Minute of hour (0-59)

    Returns:
        Aware datetime in tz. When the local time occurs twice (DST fall back)
        the earliest occurrence is returned.

    Raises:
        InvalidTimeOfDay: hour or minute out of range
        AmbiguousOrNonexistentLocalTime: local time skipped by a DST transition
    """
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeOfDay(hour, minute)

    # fold=0 selects the earlier of two candidates
    local = datetime.combine(day, time(hour, minute), tzinfo=tz)

    round_trip = to_utc(local).astimezone(tz)
    if round_trip.replace(tzinfo=None) != local.replace(tzinfo=None):
        raise AmbiguousOrNonexistentLocalTime(local.replace(tzinfo=None), str(tz))

    return local
