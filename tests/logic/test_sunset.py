"""
Tests for the astral-backed sunset provider.
"""
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest

from hue_schedule.errors import SunsetUndefined
from hue_schedule.logic.sunset import sunset_time


class TestSunsetTime:
    """Tests for sunset_time."""

    def test_chicago_summer_sunset(self, tz):
        """Chicago sunset in late June is around 20:30 CDT."""
        reference = datetime(2024, 6, 28, 9, 0, tzinfo=tz)

        result = sunset_time(41.8781, -87.6298, tz, reference)

        assert result.tzinfo is tz
        assert result.date() == date(2024, 6, 28)
        assert time(20, 15) <= result.time() <= time(20, 45)

    def test_uses_local_calendar_date(self, tz):
        """A reference late in the local evening is already the next UTC day."""
        reference = datetime(2024, 6, 28, 23, 30, tzinfo=tz)

        result = sunset_time(41.8781, -87.6298, tz, reference)

        assert result.date() == date(2024, 6, 28)

    def test_polar_night_is_undefined(self):
        """Near the pole in midwinter the sun never rises."""
        tz = ZoneInfo("Arctic/Longyearbyen")
        reference = datetime(2024, 12, 21, 12, 0, tzinfo=tz)

        with pytest.raises(SunsetUndefined) as exc_info:
            sunset_time(78.2232, 15.6267, tz, reference)

        assert exc_info.value.day == date(2024, 12, 21)

    def test_polar_day_is_undefined(self):
        """Near the pole in midsummer the sun never sets."""
        tz = ZoneInfo("Arctic/Longyearbyen")
        reference = datetime(2024, 6, 21, 12, 0, tzinfo=tz)

        with pytest.raises(SunsetUndefined):
            sunset_time(78.2232, 15.6267, tz, reference)
