"""
Interpolation Engine

Finds the resolved change points around an instant and blends them into
the action the light should take.

Blending rules:
- STOP first point: no change, whatever comes next
- COLOR then STOP: hold the first color until the stop point
- COLOR then COLOR: linear interpolation by elapsed time

Weights are exact fractions of elapsed microseconds and blended values are
truncated toward zero, so a blend lands exactly on a point's own values at
that point's time.
"""
from datetime import datetime
from fractions import Fraction
from typing import Tuple

from hue_schedule.errors import InstantOutOfRange, InvalidBlendInput, MissingColorFields
from hue_schedule.logic.time_resolver import to_utc
from hue_schedule.models import (
    Action,
    ChangeAction,
    ColorAction,
    DailySchedule,
    ResolvedChangePoint,
)


def surrounding_points(
    schedule: DailySchedule, instant: datetime
) -> Tuple[ResolvedChangePoint, ResolvedChangePoint]:
    """
    Find the adjacent pair with before.time <= instant < after.time

    Raises:
        InstantOutOfRange: instant is before the first point or at/after the last
    """
    at = to_utc(instant)
    for before, after in zip(schedule, schedule[1:]):
        if to_utc(before.time) <= at < to_utc(after.time):
            return before, after

    first = schedule[0].time if schedule else None
    last = schedule[-1].time if schedule else None
    raise InstantOutOfRange(instant, first, last)


def blend(
    before: ResolvedChangePoint, after: ResolvedChangePoint, instant: datetime
) -> ChangeAction:
    """
    Blend two adjacent change points at an instant between them

    Returns:
        ColorAction, or None when no change should be made

    Raises:
        InvalidBlendInput: points out of order or instant outside [before, after]
        MissingColorFields: a COLOR point used in the blend lacks mirek/brightness
    """
    start = to_utc(before.time)
    end = to_utc(after.time)
    at = to_utc(instant)
    if not (start <= end and start <= at <= end):
        raise InvalidBlendInput(before.time, after.time, instant)

    if before.change.action is Action.STOP:
        return None

    start_color = _color_of(before)
    if after.change.action is Action.STOP:
        return start_color

    end_color = _color_of(after)

    span = _microseconds(end - start)
    if span == 0:
        return start_color

    before_weight = Fraction(_microseconds(end - at), span)
    after_weight = 1 - before_weight

    return ColorAction(
        mirek=int(before_weight * start_color.mirek + after_weight * end_color.mirek),
        brightness=int(
            before_weight * start_color.brightness + after_weight * end_color.brightness
        ),
    )


def get_action_for_instant(schedule: DailySchedule, instant: datetime) -> ChangeAction:
    """Action the light should take at instant"""
    before, after = surrounding_points(schedule, instant)
    return blend(before, after, instant)


def _color_of(point: ResolvedChangePoint) -> ColorAction:
    missing = [
        field
        for field in ("mirek", "brightness")
        if getattr(point.change, field) is None
    ]
    if missing:
        raise MissingColorFields(point.time, missing)
    return ColorAction(mirek=point.change.mirek, brightness=point.change.brightness)


def _microseconds(delta) -> int:
    return (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
