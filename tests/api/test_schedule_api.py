"""
Tests for schedule API endpoints
"""
import pytest
from httpx import ASGITransport, AsyncClient

from hue_schedule.api import create_app
from hue_schedule.control.schedule_cache import ScheduleCache


@pytest.mark.asyncio
class TestSystemAPI:
    """Test health and status endpoints"""

    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_status_includes_cache_statistics(self, async_client: AsyncClient):
        response = await async_client.get("/status")

        assert response.status_code == 200
        data = response.json()
        assert data["timezone"] == "America/Chicago"
        assert data["schedule_cache"]["resolved"] is False


@pytest.mark.asyncio
class TestNowAPI:
    """Test the current action endpoint"""

    async def test_color_action(self, async_client: AsyncClient):
        """Should return the blended color in the poller's wire format"""
        response = await async_client.get("/now", params={"at": "2024-06-28T13:20:00-05:00"})

        assert response.status_code == 200
        data = response.json()
        assert data == {
            "now": "2024-06-28T13:20:00-05:00",
            "change_action": {"color": {"mirek": 275, "brightness": 95}},
            "just_updated": True,
        }

    async def test_no_change_action(self, async_client: AsyncClient):
        response = await async_client.get("/now", params={"at": "2024-06-28T23:45:00-05:00"})

        assert response.status_code == 200
        assert response.json()["change_action"] == "none"

    async def test_naive_instant_is_local(self, async_client: AsyncClient):
        response = await async_client.get("/now", params={"at": "2024-06-28T13:20:00"})

        assert response.status_code == 200
        assert response.json()["now"] == "2024-06-28T13:20:00-05:00"

    async def test_utc_instant_is_converted(self, async_client: AsyncClient):
        response = await async_client.get("/now", params={"at": "2024-06-28T18:20:00Z"})

        assert response.status_code == 200
        assert response.json()["now"] == "2024-06-28T13:20:00-05:00"

    async def test_second_request_not_updated(self, async_client: AsyncClient):
        await async_client.get("/now", params={"at": "2024-06-28T13:20:00-05:00"})
        response = await async_client.get("/now", params={"at": "2024-06-28T14:00:00-05:00"})

        assert response.json()["just_updated"] is False

    async def test_without_instant_uses_clock(self, async_client: AsyncClient):
        response = await async_client.get("/now")

        assert response.status_code == 200
        assert response.json()["just_updated"] is True

    async def test_invalid_instant(self, async_client: AsyncClient):
        response = await async_client.get("/now", params={"at": "yesterday-ish"})

        assert response.status_code == 422


@pytest.mark.asyncio
class TestRefreshAPI:
    """Test the forced refresh endpoint"""

    async def test_refresh(self, async_client: AsyncClient, cache: ScheduleCache):
        response = await async_client.post("/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["just_updated"] is True
        assert data["first"] < data["expires"]
        assert cache.refreshes == 1


@pytest.mark.asyncio
class TestDebugAPI:
    """Test the diagnostics endpoint"""

    async def test_debug(self, async_client: AsyncClient):
        response = await async_client.get("/debug", params={"at": "2024-06-28T21:00:00-05:00"})

        assert response.status_code == 200
        data = response.json()
        assert data["timezone"] == "America/Chicago"
        assert len(data["raw_schedule"]) == 4
        assert data["raw_schedule"][1]["from"] == "sunset"
        assert data["raw_schedule"][1]["hour"] == -1
        assert len(data["todays_schedule"]) == 5
        assert data["before"]["time"] == "2024-06-28T19:40:00-05:00"
        assert data["after"]["time"] == "2024-06-28T22:00:00-05:00"
        assert data["change_action"] == {"color": {"mirek": 388, "brightness": 55}}


@pytest.mark.asyncio
class TestErrorResponses:
    """Test mapping of schedule errors to responses"""

    async def test_resolution_error(self, test_settings, build_definition, sunset_2040):
        definition = build_definition([
            {"hour": 22, "change": {"action": "stop"}},
            {"hour": 1, "change": {"action": "stop"}},
        ])
        app = create_app(test_settings, ScheduleCache(definition, sunset_provider=sunset_2040))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/now", params={"at": "2024-06-28T23:00:00-05:00"})

        assert response.status_code == 503
        assert response.json()["error"]["name"] == "UnsortedSchedule"

    async def test_query_error(self, test_settings, build_definition, sunset_2040):
        definition = build_definition([{"hour": 7, "change": {"action": "color"}}])
        app = create_app(test_settings, ScheduleCache(definition, sunset_provider=sunset_2040))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/now", params={"at": "2024-06-28T12:00:00-05:00"})

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["name"] == "MissingColorFields"
        assert "mirek" in error["message"]


@pytest.mark.asyncio
class TestRequestedInstantOutOfRange:
    """Test client-supplied instants outside the cached schedule"""

    async def test_now_before_cached_schedule(self, async_client: AsyncClient):
        await async_client.get("/now", params={"at": "2024-06-28T13:20:00-05:00"})

        response = await async_client.get("/now", params={"at": "2024-06-28T06:00:00-05:00"})

        assert response.status_code == 422
        assert response.json()["error"]["name"] == "InstantOutOfRange"

    async def test_debug_before_cached_schedule(self, async_client: AsyncClient):
        await async_client.get("/now", params={"at": "2024-06-28T13:20:00-05:00"})

        response = await async_client.get("/debug", params={"at": "2024-06-27T12:00:00-05:00"})

        assert response.status_code == 422


class TestScheduleCacheDependency:
    """Test the cache handle attached to the app"""

    def test_app_holds_cache(self, test_app, cache):
        assert test_app.state.schedule_cache is cache
