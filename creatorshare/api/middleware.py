"""
CreatorShare API Middleware

Provides:
- Correlation ID tracking for request tracing
- Request/response logging
- Fixed-window rate limiting (in-memory), applied by route dependencies
"""

from __future__ import annotations

import threading
import time
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from creatorshare.monitoring import bind_context, unbind_context

if TYPE_CHECKING:
    from starlette.datastructures import QueryParams

logger = structlog.get_logger(__name__)

# Sensitive query parameter keys that should be redacted in logs
SENSITIVE_PARAM_KEYS = frozenset({
    "token", "access_token", "api_key", "apikey", "password",
    "secret", "key", "auth", "authorization", "signature",
})


def sanitize_query_params(query_params: QueryParams | None) -> str | None:
    """Redact sensitive values and truncate long ones for logging."""
    if not query_params:
        return None

    sanitized: dict[str, str] = {}
    for key, value in query_params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_PARAM_KEYS):
            sanitized[key] = "[REDACTED]"
        elif len(value) > 100:
            sanitized[key] = value[:100] + "...[truncated]"
        else:
            sanitized[key] = value

    return str(sanitized) if sanitized else None


def get_client_ip(request: Request) -> str:
    """Client IP, preferring the first X-Forwarded-For hop."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Add a correlation ID to every request.

    Taken from the X-Correlation-ID header when present, generated
    otherwise; bound into the structlog context for the duration of the
    request and echoed on the response.
    """

    HEADER_NAME = "X-Correlation-ID"

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        bind_context(correlation_id=correlation_id)
        try:
            response = await call_next(request)
        finally:
            unbind_context("correlation_id")

        response.headers[self.HEADER_NAME] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    SKIP_PATHS = {"/health", "/favicon.ico"}

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            query=sanitize_query_params(request.query_params),
            client_ip=get_client_ip(request),
        )

        try:
            response = await call_next(request)
        except Exception as e:  # Intentional broad catch: log and re-raise to the error handler
            logger.exception(
                "request_failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(e),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code
        log_level = "info" if status_code < 400 else "warning" if status_code < 500 else "error"
        getattr(logger, log_level)(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response


# ═══════════════════════════════════════════════════════════════
# RATE LIMITING
# ═══════════════════════════════════════════════════════════════


@dataclass
class RateLimitEntry:
    """Request count for one identifier in one window."""

    count: int = 0
    window_end: float = 0.0


class FixedWindowRateLimiter:
    """
    Fixed-window request counter.

    Each identifier gets a counter per window, keyed by the identifier
    and the window index ``floor(now / window)``. Counters from past
    windows are pruned periodically.
    """

    CLEANUP_INTERVAL_SECONDS = 300

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._last_cleanup = clock()

    def hit(self, identifier: str, max_requests: int, window_seconds: int) -> bool:
        """Count a request. False once ``max_requests`` is reached in the current window."""
        now = self._clock()
        window_index = int(now // window_seconds)
        key = f"{identifier}_{window_index}"

        with self._lock:
            self._maybe_cleanup(now)
            entry = self._entries.get(key)
            if entry is None:
                entry = RateLimitEntry(window_end=(window_index + 1) * window_seconds)
                self._entries[key] = entry

            if entry.count >= max_requests:
                logger.warning(
                    "rate_limit_exceeded",
                    identifier=identifier,
                    max_requests=max_requests,
                    window_seconds=window_seconds,
                )
                return False

            entry.count += 1
            return True

    def retry_after(self, window_seconds: int) -> int:
        """Seconds until the current window closes."""
        now = self._clock()
        return max(1, int(window_seconds - now % window_seconds))

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def _maybe_cleanup(self, now: float) -> None:
        if now - self._last_cleanup < self.CLEANUP_INTERVAL_SECONDS:
            return
        expired = [key for key, entry in self._entries.items() if entry.window_end <= now]
        for key in expired:
            del self._entries[key]
        self._last_cleanup = now
