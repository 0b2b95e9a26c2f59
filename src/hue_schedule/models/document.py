"""
Schedule Document - Pydantic models for the YAML schedule file

Example:

    location:
      latitude: 41.88
      longitude: -87.63
      timezone: America/Chicago
    schedule:
      - hour: 7
        change: {action: color, mirek: 250, brightness: 100}
      - hour: -1
        from: sunset
        change: {action: color, mirek: 400, brightness: 60}
      - hour: 23
        change: {action: stop}
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hue_schedule.models.schedule import Action, Anchor


class LocationDocument(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    timezone: str = Field(..., min_length=1)


class ChangeDocument(BaseModel):
    action: Action
    mirek: Optional[int] = Field(None, ge=0, le=65535)
    brightness: Optional[int] = Field(None, ge=0, le=255)


class ScheduleItemDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hour: Optional[int] = Field(None, ge=-128, le=127)
    minute: Optional[int] = Field(None, ge=-128, le=127)
    from_: Optional[Anchor] = Field(None, alias="from")
    change: ChangeDocument


class ScheduleDocument(BaseModel):
    location: LocationDocument
    schedule: List[ScheduleItemDocument]
