"""
API Schemas - Pydantic models for responses
"""
from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from hue_schedule.control.schedule_cache import CurrentAction, DebugSnapshot
from hue_schedule.models import (
    ChangeAction,
    ChangeDirective,
    RawChangePoint,
    ResolvedChangePoint,
)


# Change Action Schemas
class MirekBrightness(BaseModel):
    mirek: int = Field(..., ge=0, le=65535)
    brightness: int = Field(..., ge=0, le=255)


class ColorChangeAction(BaseModel):
    color: MirekBrightness


ChangeActionSchema = Union[Literal["none"], ColorChangeAction]


def change_action_schema(action: ChangeAction) -> ChangeActionSchema:
    """Wire form of a change action: "none" or {"color": {...}}"""
    if action is None:
        return "none"
    return ColorChangeAction(
        color=MirekBrightness(mirek=action.mirek, brightness=action.brightness)
    )


class NowResponse(BaseModel):
    now: datetime
    change_action: ChangeActionSchema
    just_updated: bool

    @classmethod
    def from_current(cls, current: CurrentAction) -> "NowResponse":
        return cls(
            now=current.instant,
            change_action=change_action_schema(current.action),
            just_updated=current.just_refreshed,
        )


class RefreshResponse(BaseModel):
    just_updated: Literal[True] = True
    first: datetime
    expires: datetime


# Schedule Schemas
class ChangeSchema(BaseModel):
    action: str
    mirek: Optional[int] = None
    brightness: Optional[int] = None

    @classmethod
    def from_directive(cls, change: ChangeDirective) -> "ChangeSchema":
        return cls(action=change.action.value, mirek=change.mirek, brightness=change.brightness)


class RawItemSchema(BaseModel):
    hour: int
    minute: int
    from_: Optional[str] = Field(None, serialization_alias="from")
    change: ChangeSchema

    @classmethod
    def from_point(cls, point: RawChangePoint) -> "RawItemSchema":
        return cls(
            hour=point.hour,
            minute=point.minute,
            from_=point.anchor.value if point.anchor else None,
            change=ChangeSchema.from_directive(point.change),
        )


class ProcessedItemSchema(BaseModel):
    time: datetime
    change: ChangeSchema

    @classmethod
    def from_point(cls, point: ResolvedChangePoint) -> "ProcessedItemSchema":
        return cls(time=point.time, change=ChangeSchema.from_directive(point.change))


class DebugResponse(BaseModel):
    timezone: str
    latitude: float
    longitude: float
    raw_schedule: List[RawItemSchema]
    todays_schedule: List[ProcessedItemSchema]
    now: datetime
    before: ProcessedItemSchema
    after: ProcessedItemSchema
    change_action: ChangeActionSchema
    just_updated: bool

    @classmethod
    def from_snapshot(cls, snapshot: DebugSnapshot) -> "DebugResponse":
        location = snapshot.definition.location
        before, after = snapshot.surrounding
        return cls(
            timezone=str(snapshot.timezone),
            latitude=location.latitude,
            longitude=location.longitude,
            raw_schedule=[RawItemSchema.from_point(p) for p in snapshot.definition.points],
            todays_schedule=[ProcessedItemSchema.from_point(p) for p in snapshot.schedule],
            now=snapshot.instant,
            before=ProcessedItemSchema.from_point(before),
            after=ProcessedItemSchema.from_point(after),
            change_action=change_action_schema(snapshot.action),
            just_updated=snapshot.just_refreshed,
        )


class ErrorDetail(BaseModel):
    name: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
