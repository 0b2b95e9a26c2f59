"""
Sunset Provider

Computes the local sunset time for a location using astral.
"""
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

import structlog
from astral import Observer
from astral.sun import sunset

from hue_schedule.errors import SunsetUndefined

logger = structlog.get_logger(__name__)

# (latitude, longitude, timezone, reference_instant) -> sunset instant
SunsetProvider = Callable[[float, float, ZoneInfo, datetime], datetime]


def sunset_time(
    latitude: float, longitude: float, tz: ZoneInfo, reference: datetime
) -> datetime:
    """
    Get the sunset for the calendar date of reference in tz

    Raises:
        SunsetUndefined: the sun does not set (or never rises) on that date
    """
    day = reference.astimezone(tz).date()
    observer = Observer(latitude=latitude, longitude=longitude)

    try:
        result = sunset(observer, date=day, tzinfo=tz)
    except ValueError as e:
        # astral raises ValueError when the sun never crosses the horizon
        raise SunsetUndefined(latitude, longitude, day, str(e)) from e

    logger.debug(
        "sunset_calculated",
        latitude=latitude,
        longitude=longitude,
        date=day.isoformat(),
        sunset=result.isoformat(),
    )
    return result.astimezone(tz)
