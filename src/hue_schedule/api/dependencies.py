"""
Request dependencies
"""
from fastapi import Request

from hue_schedule.control.schedule_cache import ScheduleCache


def get_schedule_cache(request: Request) -> ScheduleCache:
    """Schedule cache created at startup and attached by create_app"""
    return request.app.state.schedule_cache
