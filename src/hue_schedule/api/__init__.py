"""
Hue Schedule API
"""
import time

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hue_schedule.config import Settings
from hue_schedule.control.schedule_cache import ScheduleCache
from hue_schedule.errors import QueryError, ResolutionError, ScheduleError

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, exc: ScheduleError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"name": type(exc).__name__, "message": str(exc)}},
    )


def create_app(settings: Settings, cache: ScheduleCache) -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
# Hue Schedule API

Answers "what should the lights be doing right now" from a daily schedule
of change points. Points are either fixed wall-clock times or offsets from
the local sunset, and colors are blended linearly between adjacent points.

- `GET /now` - current change action (`"none"` or a mirek/brightness color)
- `POST /refresh` - re-resolve today's schedule
- `GET /debug` - raw and resolved schedule for inspection
        """,
        docs_url="/docs" if settings.api_docs_enabled else None,
        redoc_url="/redoc" if settings.api_docs_enabled else None,
        openapi_tags=[
            {
                "name": "system",
                "description": "System health and status endpoints.",
            },
            {
                "name": "schedule",
                "description": "Current lighting action and schedule diagnostics.",
            },
        ],
    )

    app.state.schedule_cache = cache

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_responses(request: Request, call_next):
        """Log every response; non-2xx responses at warning level"""
        start = time.perf_counter()
        response = await call_next(request)
        fields = dict(
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        if 200 <= response.status_code < 300:
            logger.info("request_completed", **fields)
        else:
            logger.warning("request_failed", **fields)
        return response

    @app.exception_handler(ResolutionError)
    async def resolution_error_handler(request: Request, exc: ResolutionError):
        return _error_response(503, exc)

    @app.exception_handler(QueryError)
    async def query_error_handler(request: Request, exc: QueryError):
        return _error_response(500, exc)

    @app.get(
        "/health",
        summary="Health Check",
        description="Check if the daemon is running and healthy.",
        tags=["system"],
    )
    async def health_check():
        """Health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "version": settings.api_version,
            "service": "hue-schedule",
        }

    @app.get(
        "/status",
        summary="System Status",
        description="Service status with schedule cache statistics.",
        tags=["system"],
    )
    async def get_status():
        """Get daemon status including schedule cache statistics"""
        return {
            "status": "up",
            "version": settings.api_version,
            "service": "hue-schedule",
            "timezone": str(cache.timezone),
            "schedule_cache": cache.get_statistics(),
        }

    from hue_schedule.api.routes import schedule

    app.include_router(schedule.router, tags=["schedule"])

    return app
