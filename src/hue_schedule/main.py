"""
Hue Schedule Daemon - Main Entry Point
"""
import asyncio
import sys
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI

from hue_schedule import __version__
from hue_schedule.api import create_app
from hue_schedule.config import Settings, get_settings
from hue_schedule.control.schedule_cache import ScheduleCache
from hue_schedule.control.schedule_loader import load_schedule_definition
from hue_schedule.errors import ConfigurationError, ResolutionError
from hue_schedule.logging_config import setup_logging

logger = structlog.get_logger(__name__)


class ScheduleDaemon:
    """Main daemon controller for the schedule service"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.cache: Optional[ScheduleCache] = None
        self.app: Optional[FastAPI] = None

    async def startup(self):
        """
        Load the schedule and build the application

        Raises:
            ConfigurationError: the schedule file is missing or invalid
        """
        logger.info("schedule_daemon_starting", version=__version__)

        definition = load_schedule_definition(self.settings.schedule_yaml_path)
        self.cache = ScheduleCache(definition)

        # Warm the cache; a failure here is retried on the first request
        try:
            await self.cache.force_refresh()
        except ResolutionError as e:
            logger.error("initial_schedule_refresh_failed", error=str(e))

        self.app = create_app(self.settings, self.cache)

        logger.info("schedule_daemon_ready", port=self.settings.port)

    async def shutdown(self):
        """Gracefully shutdown all components"""
        logger.info("schedule_daemon_shutting_down")
        if self.cache:
            logger.info("schedule_cache_final_statistics", **self.cache.get_statistics())
        logger.info("schedule_daemon_stopped")


async def main_async():
    """Async main function"""
    daemon = ScheduleDaemon()

    try:
        await daemon.startup()

        config = uvicorn.Config(
            daemon.app,
            host=daemon.settings.host,
            port=daemon.settings.port,
            log_level=daemon.settings.log_level.lower(),
            access_log=False,
        )
        server = uvicorn.Server(config)
        await server.serve()

    except ConfigurationError as e:
        logger.error("schedule_configuration_invalid", error=str(e))
        sys.exit(1)
    except Exception as e:
        logger.error("daemon_error", error=str(e), exc_info=True)
        sys.exit(1)
    finally:
        await daemon.shutdown()


def main():
    """Entry point for the daemon"""
    settings = get_settings()
    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        log_file=settings.log_file,
    )

    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        logger.info("interrupted_by_user")
        sys.exit(0)


if __name__ == "__main__":
    main()
