"""
CreatorShare FastAPI Application Factory

Creates and configures the FastAPI application with:
- Content, creator, remix, ledger, poll, notification, revenue and frame routes
- Middleware (correlation ID, request logging, CORS)
- Error handlers producing the ``{"success": false, "error": ...}`` envelope
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from creatorshare import __version__
from creatorshare.api.middleware import (
    CorrelationIdMiddleware,
    FixedWindowRateLimiter,
    RequestLoggingMiddleware,
)
from creatorshare.api.responses import error_response
from creatorshare.config import Settings, get_settings
from creatorshare.database.store import LedgerStore
from creatorshare.exceptions import ApiError, RateLimitExceeded
from creatorshare.monitoring import configure_logging
from creatorshare.services.analytics import AnalyticsService
from creatorshare.services.frames import FrameActionDispatcher
from creatorshare.services.notifications import NotificationService
from creatorshare.services.polls import PollVotingEngine

logger = structlog.get_logger(__name__)


def format_validation_errors(errors: list[Any]) -> str:
    """Render pydantic errors as ``"Validation error: field: message; ..."``."""
    parts = []
    for error in errors:
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")
        )
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Validation error: " + "; ".join(parts)


async def sweep_expired_polls(polls: PollVotingEngine, interval_seconds: int) -> None:
    """Close expired polls periodically until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            polls.close_expired()
        except Exception as e:  # Intentional broad catch: keep the sweeper alive
            logger.exception("poll_sweep_failed", error=str(e))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start the poll sweeper; stop it on shutdown."""
    settings: Settings = app.state.settings
    sweeper = asyncio.create_task(
        sweep_expired_polls(app.state.polls, settings.poll_sweep_interval_seconds)
    )
    logger.info("creatorshare_started", environment=settings.app_env)
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        logger.info("creatorshare_stopped")


def create_app(
    settings: Settings | None = None,
    store: LedgerStore | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment)
        store: Ledger store to serve (a fresh one by default)
        clock: Clock for a freshly created store; ignored when ``store`` is given

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_output=settings.is_production)

    docs_url = None if settings.is_production else "/docs"
    app = FastAPI(
        title="CreatorShare",
        description="Content and revenue-share ledger",
        version=__version__,
        docs_url=docs_url,
        redoc_url=None,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Ledger components
    store = store or LedgerStore(clock=clock)
    notifications = NotificationService(store, base_url=settings.frame_base_url)
    polls = PollVotingEngine(store, notifications)

    app.state.settings = settings
    app.state.store = store
    app.state.notifications = notifications
    app.state.polls = polls
    app.state.analytics = AnalyticsService(store)
    app.state.frames = FrameActionDispatcher(
        store,
        polls,
        notifications,
        max_age_seconds=settings.frame_message_max_age_seconds,
    )
    app.state.rate_limiter = FixedWindowRateLimiter()

    # Middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-user-id", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID", "Retry-After"],
    )

    # Exception handlers
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        headers = None
        if isinstance(exc, RateLimitExceeded) and exc.retry_after:
            headers = {"Retry-After": str(exc.retry_after)}
        return error_response(exc.message, exc.status_code, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Only locations and messages are returned, never the submitted values
        return error_response(format_validation_errors(exc.errors()), 400)

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return error_response(format_validation_errors(exc.errors()), 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            path=str(request.url.path),
            error=str(exc),
        )
        return error_response("Internal server error", 500)

    # Include routers
    from creatorshare.api.routes import (
        content,
        creators,
        frame,
        ledger,
        notifications as notification_routes,
        polls as poll_routes,
        remixes,
        revenue,
        system,
    )

    app.include_router(content.router, prefix="/api")
    app.include_router(creators.router, prefix="/api")
    app.include_router(remixes.router, prefix="/api")
    app.include_router(ledger.router, prefix="/api")
    app.include_router(poll_routes.router, prefix="/api")
    app.include_router(notification_routes.router, prefix="/api")
    app.include_router(revenue.router, prefix="/api")
    app.include_router(frame.router, prefix="/api")
    app.include_router(system.router)

    logger.info(
        "fastapi_app_created",
        version=__version__,
        environment=settings.app_env,
        docs_url=docs_url,
    )
    return app


def main() -> None:
    """
    Run the CreatorShare server.

    For production use:
        uvicorn creatorshare.api.app:create_app --factory --host 0.0.0.0 --port 8000
    """
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "creatorshare.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
