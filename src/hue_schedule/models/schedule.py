"""
Schedule Models - Change points before and after daily resolution
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
from zoneinfo import ZoneInfo


class Action(str, Enum):
    """What a change point does to the light"""

    COLOR = "color"
    STOP = "stop"


class Anchor(str, Enum):
    """Reference instant a change point's offsets are measured from"""

    SUNSET = "sunset"


@dataclass(frozen=True)
class ChangeDirective:
    """
    Lighting change requested by a change point

    COLOR directives must carry both mirek and brightness by the time they
    are interpolated; STOP directives ignore them.
    """
    action: Action
    mirek: Optional[int] = None
    brightness: Optional[int] = None


@dataclass(frozen=True)
class RawChangePoint:
    """
    Change point as written in the schedule document

    Without an anchor, hour/minute are a wall-clock time. With
    Anchor.SUNSET they are a signed offset from that day's sunset.
    """
    change: ChangeDirective
    hour: int = 0
    minute: int = 0
    anchor: Optional[Anchor] = None


@dataclass(frozen=True)
class LocationConfig:
    """Where the schedule runs"""
    latitude: float
    longitude: float
    timezone: ZoneInfo


@dataclass(frozen=True)
class ScheduleDefinition:
    """Validated schedule document. Never mutated after loading."""
    location: LocationConfig
    points: Tuple[RawChangePoint, ...]

    @property
    def timezone(self) -> ZoneInfo:
        return self.location.timezone


@dataclass(frozen=True)
class ResolvedChangePoint:
    """Change point placed at an absolute instant"""
    time: datetime
    change: ChangeDirective


@dataclass(frozen=True)
class ColorAction:
    """Color the light should show"""
    mirek: int
    brightness: int


# Resolved points for one day plus the first point repeated 24h later.
DailySchedule = Tuple[ResolvedChangePoint, ...]

# None means "make no change".
ChangeAction = Optional[ColorAction]
