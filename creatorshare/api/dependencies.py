"""
CreatorShare FastAPI Dependencies

Dependency injection for API routes.

Provides:
- Settings and ledger components held on ``app.state``
- Caller identity from the ``x-user-id`` header
- Request bodies validated against the application settings
- Per-route fixed-window rate limits
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated, Any, Literal, TypeVar

from fastapi import Body, Depends, Header, Request
from pydantic import BaseModel

from creatorshare.api.middleware import FixedWindowRateLimiter, get_client_ip
from creatorshare.config import Settings
from creatorshare.database.store import LedgerStore
from creatorshare.exceptions import AuthenticationRequired, RateLimitExceeded
from creatorshare.services.analytics import AnalyticsService
from creatorshare.services.frames import FrameActionDispatcher
from creatorshare.services.notifications import NotificationService
from creatorshare.services.polls import PollVotingEngine

# =============================================================================
# Settings
# =============================================================================


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# =============================================================================
# Ledger Components
# =============================================================================


def get_store(request: Request) -> LedgerStore:
    return request.app.state.store


def get_poll_engine(request: Request) -> PollVotingEngine:
    return request.app.state.polls


def get_analytics(request: Request) -> AnalyticsService:
    return request.app.state.analytics


def get_notification_service(request: Request) -> NotificationService:
    return request.app.state.notifications


def get_frame_dispatcher(request: Request) -> FrameActionDispatcher:
    return request.app.state.frames


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.rate_limiter


StoreDep = Annotated[LedgerStore, Depends(get_store)]
PollEngineDep = Annotated[PollVotingEngine, Depends(get_poll_engine)]
AnalyticsDep = Annotated[AnalyticsService, Depends(get_analytics)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
FrameDispatcherDep = Annotated[FrameActionDispatcher, Depends(get_frame_dispatcher)]
RateLimiterDep = Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)]


# =============================================================================
# Authentication
# =============================================================================


async def get_current_user_optional(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """
    Caller id from the ``x-user-id`` header.

    The header is trusted as-is; an upstream gateway is responsible for
    authenticating it.
    """
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


async def get_current_user(
    user_id: Annotated[str | None, Depends(get_current_user_optional)],
) -> str:
    if user_id is None:
        raise AuthenticationRequired()
    return user_id


OptionalUserDep = Annotated[str | None, Depends(get_current_user_optional)]
CurrentUserDep = Annotated[str, Depends(get_current_user)]


# =============================================================================
# Request Bodies
# =============================================================================

ModelT = TypeVar("ModelT", bound=BaseModel)


def validated_body(model: type[ModelT]) -> Callable[..., Awaitable[ModelT]]:
    """
    Build a dependency validating the JSON body as ``model``.

    Settings-driven limits (tag counts, default shares) come from the
    application's own settings rather than the process environment.
    A failing body raises ``ValidationError``, rendered as a 400.
    """

    async def parse_body(
        payload: Annotated[dict[str, Any], Body()],
        settings: SettingsDep,
    ) -> ModelT:
        return model.model_validate(payload, context=settings.validation_context)

    return parse_body


# =============================================================================
# Rate Limiting
# =============================================================================


def rate_limit(
    scope: str,
    limit_setting: str = "rate_limit_requests",
    window_seconds: int | None = None,
    key: Literal["user", "ip"] = "user",
) -> Callable[..., Awaitable[None]]:
    """
    Build a dependency enforcing a fixed-window limit on one route.

    Args:
        scope: Prefix separating this route's counters from others
        limit_setting: Settings attribute holding the request budget
        window_seconds: Window length; defaults to ``rate_limit_window_seconds``
        key: Count per caller id (falling back to IP) or per client IP
    """

    async def check_rate_limit(
        request: Request,
        settings: SettingsDep,
        limiter: RateLimiterDep,
        user_id: OptionalUserDep,
    ) -> None:
        if not settings.rate_limit_enabled:
            return

        identifier = user_id if key == "user" and user_id else get_client_ip(request)
        window = window_seconds or settings.rate_limit_window_seconds
        if not limiter.hit(f"{scope}_{identifier}", getattr(settings, limit_setting), window):
            raise RateLimitExceeded(
                "Rate limit exceeded. Try again later.",
                retry_after=limiter.retry_after(window),
            )

    return check_rate_limit
