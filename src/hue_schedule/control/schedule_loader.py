"""
Schedule Loader - Load the schedule definition from YAML

Runs once on daemon startup. Any failure is a ConfigurationError and
prevents the daemon from starting.
"""
from pathlib import Path
from typing import Any, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
import yaml
from pydantic import ValidationError

from hue_schedule.errors import (
    ConfigurationError,
    EmptyScheduleError,
    ScheduleFileError,
    UnknownTimezoneError,
    UnknownTokenError,
)
from hue_schedule.models import (
    Action,
    Anchor,
    ChangeDirective,
    LocationConfig,
    RawChangePoint,
    ScheduleDefinition,
    ScheduleDocument,
)

logger = structlog.get_logger(__name__)


def load_schedule_definition(path: Union[str, Path]) -> ScheduleDefinition:
    """
    Load and validate a schedule definition from a YAML file

    Args:
        path: Path to the schedule YAML file

    Returns:
        Validated, immutable schedule definition

    Raises:
        ConfigurationError: file missing/unreadable/unparseable or invalid content
    """
    path = Path(path)
    logger.info("loading_schedule", path=str(path))

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        logger.error("schedule_file_unreadable", path=str(path), error=str(e))
        raise ScheduleFileError(str(path), str(e)) from e
    except yaml.YAMLError as e:
        logger.error("schedule_file_unparseable", path=str(path), error=str(e))
        raise ScheduleFileError(str(path), f"Unable to parse schedule yaml file: {e}") from e

    definition = parse_schedule_definition(data)

    logger.info(
        "schedule_loaded",
        path=str(path),
        timezone=str(definition.timezone),
        points=len(definition.points),
    )
    return definition


def parse_schedule_definition(data: Any) -> ScheduleDefinition:
    """
    Validate a parsed schedule document and convert it to domain types

    Raises:
        UnknownTokenError: unrecognized 'from' or 'action' token
        UnknownTimezoneError: timezone is not an IANA identifier
        EmptyScheduleError: schedule list is empty
        ConfigurationError: any other validation failure
    """
    try:
        document = ScheduleDocument.model_validate(data)
    except ValidationError as e:
        _raise_for_unknown_tokens(e)
        logger.error("schedule_invalid", errors=e.errors(include_url=False))
        raise ConfigurationError(f"Invalid schedule document: {e}") from e

    try:
        tz = ZoneInfo(document.location.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.error("schedule_unknown_timezone", timezone=document.location.timezone)
        raise UnknownTimezoneError(document.location.timezone) from e

    if not document.schedule:
        logger.error("schedule_empty")
        raise EmptyScheduleError()

    points = tuple(
        RawChangePoint(
            change=ChangeDirective(
                action=item.change.action,
                mirek=item.change.mirek,
                brightness=item.change.brightness,
            ),
            hour=item.hour or 0,
            minute=item.minute or 0,
            anchor=item.from_,
        )
        for item in document.schedule
    )

    return ScheduleDefinition(
        location=LocationConfig(
            latitude=document.location.latitude,
            longitude=document.location.longitude,
            timezone=tz,
        ),
        points=points,
    )


def _raise_for_unknown_tokens(error: ValidationError) -> None:
    for detail in error.errors(include_url=False):
        if detail["type"] != "enum":
            continue
        loc = detail["loc"]
        enum = Anchor if loc[-1] == "from" else Action
        location = ".".join(str(part) for part in loc)
        logger.error("schedule_unknown_token", location=location, value=detail["input"])
        raise UnknownTokenError(location, detail["input"], [member.value for member in enum]) from error
