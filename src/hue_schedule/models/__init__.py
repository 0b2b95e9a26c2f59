"""
Schedule data models
"""
from hue_schedule.models.schedule import (
    Action,
    Anchor,
    ChangeAction,
    ChangeDirective,
    ColorAction,
    DailySchedule,
    LocationConfig,
    RawChangePoint,
    ResolvedChangePoint,
    ScheduleDefinition,
)
from hue_schedule.models.document import (
    ChangeDocument,
    LocationDocument,
    ScheduleDocument,
    ScheduleItemDocument,
)

__all__ = [
    "Action",
    "Anchor",
    "ChangeAction",
    "ChangeDirective",
    "ColorAction",
    "DailySchedule",
    "LocationConfig",
    "RawChangePoint",
    "ResolvedChangePoint",
    "ScheduleDefinition",
    "ChangeDocument",
    "LocationDocument",
    "ScheduleDocument",
    "ScheduleItemDocument",
]
