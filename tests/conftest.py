"""
Shared test fixtures for schedule service tests.

Provides fixtures for:
- Timezone and fixed sunset providers
- Schedule definitions built from documents
- Schedule cache instances
- API client (httpx AsyncClient over ASGI)
"""
import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import AsyncGenerator
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure src/ is on sys.path for direct pytest runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hue_schedule.api import create_app
from hue_schedule.config import Settings
from hue_schedule.control.schedule_cache import ScheduleCache
from hue_schedule.control.schedule_loader import parse_schedule_definition


TIMEZONE = "America/Chicago"
TEST_DAY = date(2024, 6, 28)


# ============================================================================
# Time Fixtures
# ============================================================================

@pytest.fixture
def tz() -> ZoneInfo:
    """Timezone used by the sample schedules."""
    return ZoneInfo(TIMEZONE)


@pytest.fixture
def at(tz):
    """Build an aware datetime on TEST_DAY (or another day) in the test timezone."""
    def _at(hour: int, minute: int = 0, second: int = 0, day: date = TEST_DAY) -> datetime:
        return datetime.combine(day, time(hour, minute, second), tzinfo=tz)
    return _at


def fixed_sunset(hour: int, minute: int):
    """Sunset provider returning the same wall-clock sunset every day."""
    calls = []

    def provider(latitude, longitude, tz, reference):
        calls.append(reference)
        day = reference.astimezone(tz).date()
        return datetime.combine(day, time(hour, minute), tzinfo=tz)

    provider.calls = calls
    return provider


@pytest.fixture
def sunset_at():
    """Factory for fixed-time sunset providers."""
    return fixed_sunset


@pytest.fixture
def sunset_2040():
    """Sunset at 20:40 local every day."""
    return fixed_sunset(20, 40)


# ============================================================================
# Definition Fixtures
# ============================================================================

def make_definition(schedule: list, timezone: str = TIMEZONE):
    """Build a schedule definition from a list of raw schedule items."""
    return parse_schedule_definition(
        {
            "location": {"latitude": 41.8781, "longitude": -87.6298, "timezone": timezone},
            "schedule": schedule,
        }
    )


def color(mirek: int, brightness: int) -> dict:
    return {"action": "color", "mirek": mirek, "brightness": brightness}


STOP = {"action": "stop"}


@pytest.fixture
def build_definition():
    """Factory building a schedule definition from raw schedule items."""
    return make_definition


@pytest.fixture
def sample_schedule() -> list:
    """Morning ramp, sunset-relative evening, stop at night."""
    return [
        {"hour": 7, "change": color(250, 100)},
        {"hour": -1, "from": "sunset", "change": color(300, 90)},
        {"hour": 22, "change": color(454, 30)},
        {"hour": 23, "minute": 30, "change": STOP},
    ]


@pytest.fixture
def sample_definition(sample_schedule):
    return make_definition(sample_schedule)


@pytest.fixture
def cache(sample_definition, sunset_2040) -> ScheduleCache:
    """Unresolved cache over the sample definition."""
    return ScheduleCache(sample_definition, sunset_provider=sunset_2040)


# ============================================================================
# Settings and App Fixtures
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        schedule_yaml_path="unused.yaml",
        log_level="DEBUG",
        json_logs=False,
        api_docs_enabled=True,
    )


@pytest.fixture
def test_app(test_settings, cache):
    """Create a FastAPI test application around the sample cache."""
    return create_app(test_settings, cache)


@pytest_asyncio.fixture
async def async_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test"
    ) as client:
        yield client
