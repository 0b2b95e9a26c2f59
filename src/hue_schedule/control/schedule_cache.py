"""
Schedule Cache - Lazily refreshed resolved schedule

Holds the most recently resolved day and recomputes it when a query
arrives at or after the cached schedule's closing point. There is no
background timer; staleness is only checked when a query comes in.

All access goes through a reader/writer lock: queries against a fresh
schedule share the lock, refreshes hold it exclusively. A failed refresh
leaves the previously cached schedule in place.
"""
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Callable, Optional, Tuple
from zoneinfo import ZoneInfo

import structlog

from hue_schedule.control.rwlock import ReadWriteLock
from hue_schedule.errors import ResolutionError
from hue_schedule.logic.daily_resolver import resolve_day
from hue_schedule.logic.interpolation import blend, surrounding_points
from hue_schedule.logic.sunset import SunsetProvider, sunset_time
from hue_schedule.logic import time_resolver
from hue_schedule.logic.time_resolver import to_utc
from hue_schedule.models import (
    ChangeAction,
    DailySchedule,
    ResolvedChangePoint,
    ScheduleDefinition,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CurrentAction:
    """Answer to "what should the light be doing at this instant" """
    instant: datetime
    action: ChangeAction
    just_refreshed: bool


@dataclass(frozen=True)
class DebugSnapshot:
    """Full diagnostic view of a query"""
    timezone: ZoneInfo
    definition: ScheduleDefinition
    schedule: DailySchedule
    instant: datetime
    surrounding: Tuple[ResolvedChangePoint, ResolvedChangePoint]
    action: ChangeAction
    just_refreshed: bool


class ScheduleCache:
    """
    Resolved daily schedule with request-driven refresh

    One instance is created at startup and shared by every request handler.
    """

    def __init__(
        self,
        definition: ScheduleDefinition,
        sunset_provider: SunsetProvider = sunset_time,
        clock: Callable[[ZoneInfo], datetime] = time_resolver.now,
    ):
        """
        Initialize the cache in the unresolved state

        Args:
            definition: Loaded schedule definition
            sunset_provider: Sunset lookup passed to the daily resolver
            clock: Returns the current instant in a timezone
        """
        self.definition = definition
        self.sunset_provider = sunset_provider
        self.clock = clock

        self._schedule: Optional[DailySchedule] = None
        self._lock = ReadWriteLock()

        # Statistics
        self.refreshes = 0
        self.refresh_failures = 0
        self.queries = 0
        self.last_refreshed: Optional[datetime] = None

        logger.info(
            "schedule_cache_initialized",
            timezone=str(definition.timezone),
            points=len(definition.points),
        )

    @property
    def timezone(self) -> ZoneInfo:
        return self.definition.timezone

    def now(self) -> datetime:
        """Current instant in the schedule timezone"""
        return self.clock(self.timezone)

    async def get_schedule(self) -> Optional[DailySchedule]:
        """Currently cached schedule, or None when unresolved"""
        async with self._lock.read():
            return self._schedule

    async def ensure_fresh(self, instant: datetime) -> bool:
        """
        Resolve the schedule if it is missing or has expired at instant

        Returns:
            True if the schedule was recomputed

        Raises:
            ResolutionError: recomputation failed; cached state is unchanged
        """
        async with self._lock.read():
            if not self._is_stale(instant):
                return False

        async with self._lock.write():
            # Another request may have refreshed while we waited
            if not self._is_stale(instant):
                return False
            self._refresh(instant)
            return True

    async def force_refresh(self, instant: Optional[datetime] = None) -> DailySchedule:
        """
        Recompute the schedule regardless of staleness

        Raises:
            ResolutionError: recomputation failed; cached state is unchanged
        """
        if instant is None:
            instant = self.now()

        async with self._lock.write():
            logger.info("schedule_refresh_forced", instant=instant.isoformat())
            return self._refresh(instant)

    async def get_current_action(self, instant: Optional[datetime] = None) -> CurrentAction:
        """
        Action the light should take at instant (defaults to now)

        Raises:
            ResolutionError: a needed refresh failed
            QueryError: the instant could not be answered from the schedule
        """
        if instant is None:
            instant = self.now()

        just_refreshed = await self.ensure_fresh(instant)

        async with self._lock.read():
            before, after = surrounding_points(self._schedule, instant)
            action = blend(before, after, instant)
            self.queries += 1

        logger.debug(
            "current_action",
            instant=instant.isoformat(),
            action=action,
            just_refreshed=just_refreshed,
        )
        return CurrentAction(instant=instant, action=action, just_refreshed=just_refreshed)

    async def get_debug_snapshot(self, instant: Optional[datetime] = None) -> DebugSnapshot:
        """Refresh if needed, then describe how the action at instant is derived"""
        if instant is None:
            instant = self.now()

        just_refreshed = await self.ensure_fresh(instant)

        async with self._lock.read():
            schedule = self._schedule
            before, after = surrounding_points(schedule, instant)
            action = blend(before, after, instant)
            self.queries += 1

        return DebugSnapshot(
            timezone=self.timezone,
            definition=self.definition,
            schedule=schedule,
            instant=instant,
            surrounding=(before, after),
            action=action,
            just_refreshed=just_refreshed,
        )

    def get_statistics(self) -> dict:
        """
        Get cache statistics

        Returns:
            Dictionary with statistics
        """
        schedule = self._schedule
        return {
            "resolved": schedule is not None,
            "first": schedule[0].time.isoformat() if schedule else None,
            "expires": schedule[-1].time.isoformat() if schedule else None,
            "refreshes": self.refreshes,
            "refresh_failures": self.refresh_failures,
            "queries": self.queries,
            "last_refreshed": self.last_refreshed.isoformat() if self.last_refreshed else None,
        }

    def _is_stale(self, instant: datetime) -> bool:
        if self._schedule is None:
            return True
        return to_utc(instant) >= to_utc(self._schedule[-1].time)

    def _refresh(self, instant: datetime) -> DailySchedule:
        """Resolve and swap in a new schedule. Caller holds the write lock."""
        try:
            schedule = resolve_day(self.definition, instant, self.sunset_provider)

            # Before today's first point the instant belongs to yesterday's cycle
            if to_utc(instant) < to_utc(schedule[0].time):
                today_first = schedule[0]
                yesterday = instant.astimezone(self.timezone).date() - timedelta(days=1)
                schedule = resolve_day(
                    self.definition,
                    datetime.combine(yesterday, time(12), tzinfo=self.timezone),
                    self.sunset_provider,
                )

                # After a DST fall back the +24h repeat lands an hour before
                # today's first point; close yesterday on today's first point
                if to_utc(instant) >= to_utc(schedule[-1].time):
                    schedule = schedule[:-1] + (today_first,)
                    logger.info(
                        "schedule_closed_on_next_day",
                        instant=instant.isoformat(),
                        closing=today_first.time.isoformat(),
                    )
        except ResolutionError as e:
            self.refresh_failures += 1
            logger.error(
                "schedule_refresh_failed",
                instant=instant.isoformat(),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        self._schedule = schedule
        self.refreshes += 1
        self.last_refreshed = instant

        logger.info(
            "schedule_refreshed",
            instant=instant.isoformat(),
            first=schedule[0].time.isoformat(),
            expires=schedule[-1].time.isoformat(),
        )
        return schedule
