"""
Schedule Errors

Exception hierarchy for the schedule service:

- ConfigurationError: raised while loading the schedule document; fatal to
  daemon startup
- ResolutionError: raised while resolving a day's schedule; the cache keeps
  its previous state
- QueryError: raised while answering a query against a resolved schedule
"""
from datetime import date, datetime
from typing import Optional


class ScheduleError(Exception):
    """Base class for all schedule errors"""


# ============================================================================
# Configuration errors
# ============================================================================

class ConfigurationError(ScheduleError):
    """The schedule document could not be loaded"""


class ScheduleFileError(ConfigurationError):
    """Schedule document is missing, unreadable or not valid YAML"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load schedule from {path}: {reason}")


class UnknownTimezoneError(ConfigurationError):
    """Timezone is not a known IANA identifier"""

    def __init__(self, timezone: str):
        self.timezone = timezone
        super().__init__(f"Unknown timezone: {timezone!r}")


class EmptyScheduleError(ConfigurationError):
    """Schedule has no change points"""

    def __init__(self):
        super().__init__("Schedule must have at least 1 item in it.")


class UnknownTokenError(ConfigurationError):
    """A 'from' or 'action' token is not recognized"""

    def __init__(self, location: str, value: object, expected: list):
        self.location = location
        self.value = value
        self.expected = expected
        super().__init__(
            f"Unknown token {value!r} at {location} (expected one of: {', '.join(expected)})"
        )


# ============================================================================
# Resolution errors
# ============================================================================

class SunsetUndefined(ScheduleError):
    """Sunset does not occur for the location on the given day"""

    def __init__(self, latitude: float, longitude: float, day: date, reason: str):
        self.latitude = latitude
        self.longitude = longitude
        self.day = day
        super().__init__(
            f"Sunset undefined at ({latitude}, {longitude}) on {day.isoformat()}: {reason}"
        )


class InvalidTimeOfDay(ScheduleError):
    """Hour or minute is out of range for a wall-clock time"""

    def __init__(self, hour: int, minute: int):
        self.hour = hour
        self.minute = minute
        super().__init__(
            f"Could not construct a time of day from hour={hour}, minute={minute}."
        )


class AmbiguousOrNonexistentLocalTime(ScheduleError):
    """Local date/time does not exist in the timezone (DST gap)"""

    def __init__(self, local: datetime, timezone: str):
        self.local = local
        self.timezone = timezone
        super().__init__(
            f"Could not convert local ({local.isoformat()}) to a {timezone} datetime."
        )


class ResolutionError(ScheduleError):
    """A day's schedule could not be resolved"""


class SunsetResolutionFailed(ResolutionError):
    """The sunset provider failed for the reference instant"""

    def __init__(self, reference: datetime, reason: str):
        self.reference = reference
        super().__init__(f"Sunset lookup failed for {reference.isoformat()}: {reason}")


class TimeOfDayResolutionFailed(ResolutionError):
    """An absolute change point could not be placed on the calendar day"""

    def __init__(self, index: int, day: date, reason: str):
        self.index = index
        self.day = day
        super().__init__(
            f"Schedule item {index} could not be resolved on {day.isoformat()}: {reason}"
        )


class UnsortedSchedule(ResolutionError):
    """Resolved schedule goes backward in time"""

    def __init__(self, index: int, before: datetime, after: datetime):
        self.index = index
        self.before = before
        self.after = after
        super().__init__(
            f"Schedule is not sorted at index {index}: "
            f"{before.isoformat()} is later than {after.isoformat()}"
        )


# ============================================================================
# Query errors
# ============================================================================

class QueryError(ScheduleError):
    """A query could not be answered from the resolved schedule"""


class InstantOutOfRange(QueryError):
    """Instant is not covered by the resolved schedule"""

    def __init__(self, instant: datetime, first: Optional[datetime], last: Optional[datetime]):
        self.instant = instant
        self.first = first
        self.last = last
        if first is None or last is None:
            message = f"now ({instant.isoformat()}) cannot be looked up in an empty schedule."
        elif instant < first:
            message = f"now ({instant.isoformat()}) is earlier than first_time ({first.isoformat()})."
        else:
            message = f"now ({instant.isoformat()}) is not earlier than last_time ({last.isoformat()})."
        super().__init__(message)


class InvalidBlendInput(QueryError):
    """Blend preconditions do not hold"""

    def __init__(self, before: datetime, after: datetime, instant: datetime):
        self.before = before
        self.after = after
        self.instant = instant
        super().__init__(
            f"Cannot blend at {instant.isoformat()} between "
            f"{before.isoformat()} and {after.isoformat()}"
        )


class MissingColorFields(QueryError):
    """A color change point lacks mirek or brightness"""

    def __init__(self, time: datetime, missing: list):
        self.time = time
        self.missing = missing
        super().__init__(
            f"Color change at {time.isoformat()} is missing: {', '.join(missing)}"
        )
