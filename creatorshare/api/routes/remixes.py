"""
Remix and Enhancement API Routes

Derived works proposed against existing content, and their approval by
the original creator.
"""

import structlog
from fastapi import APIRouter, Depends

from creatorshare.api.dependencies import (
    CurrentUserDep,
    NotificationServiceDep,
    StoreDep,
    rate_limit,
)
from creatorshare.api.responses import success_response
from creatorshare.exceptions import NotFound, PermissionDenied
from creatorshare.models.base import ApiResponse
from creatorshare.models.content import EnhancementCreate, RemixCreate

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["remixes"])

HOUR = 3600


# ============================================================================
# Remixes
# ============================================================================


@router.post(
    "/remixes",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[Depends(rate_limit("create_remix", "remix_creation_limit_per_hour", HOUR))],
)
async def create_remix(
    data: RemixCreate,
    user_id: CurrentUserDep,
    store: StoreDep,
    notifications: NotificationServiceDep,
) -> ApiResponse:
    """
    Propose a remix.

    The remix is recorded even if the original piece is unknown; in that
    case no counter is touched and nobody is notified.
    """
    remix = store.create_remix(data, remixing_creator_id=user_id)

    original = store.get_content(data.original_content_id)
    if original is not None:
        notifications.content_remixed(original, remix)

    return success_response(remix, "Remix request submitted")


@router.get("/remixes/{remix_id}", response_model=ApiResponse)
async def get_remix(remix_id: str, store: StoreDep) -> ApiResponse:
    remix = store.get_remix(remix_id)
    if remix is None:
        raise NotFound("Remix not found")
    return success_response(remix)


@router.post("/remixes/{remix_id}/approve", response_model=ApiResponse)
async def approve_remix(remix_id: str, user_id: CurrentUserDep, store: StoreDep) -> ApiResponse:
    """Approve a remix of one of the caller's pieces."""
    remix = store.get_remix(remix_id)
    if remix is None:
        raise NotFound("Remix not found")

    original = store.get_content(remix.original_content_id)
    if original is None or original.creator_id != user_id:
        raise PermissionDenied("Only the original creator can approve a remix")

    return success_response(store.approve_remix(remix_id), "Remix approved")


# ============================================================================
# Enhancements
# ============================================================================


@router.post(
    "/enhancements",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[
        Depends(rate_limit("create_enhancement", "enhancement_creation_limit_per_hour", HOUR))
    ],
)
async def create_enhancement(
    data: EnhancementCreate,
    user_id: CurrentUserDep,
    store: StoreDep,
    notifications: NotificationServiceDep,
) -> ApiResponse:
    content = store.get_content(data.content_id)
    if content is None:
        raise NotFound("Content not found")

    enhancement = store.create_enhancement(data, applied_by_creator_id=user_id)
    notifications.enhancement_applied(content, enhancement)
    return success_response(enhancement, "Enhancement request submitted")


@router.post("/enhancements/{enhancement_id}/approve", response_model=ApiResponse)
async def approve_enhancement(
    enhancement_id: str,
    user_id: CurrentUserDep,
    store: StoreDep,
) -> ApiResponse:
    enhancement = store.get_enhancement(enhancement_id)
    if enhancement is None:
        raise NotFound("Enhancement not found")

    content = store.get_content(enhancement.content_id)
    if content is None or content.creator_id != user_id:
        raise PermissionDenied("Only the content creator can approve an enhancement")

    logger.info("enhancement_approval", enhancement_id=enhancement_id, user_id=user_id)
    return success_response(store.approve_enhancement(enhancement_id), "Enhancement approved")
