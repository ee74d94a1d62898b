"""
Frame Action Dispatcher

Translates a Farcaster frame button press into a ledger operation.

Frame payloads are untrusted: only presence of the identifying fields and
freshness of the timestamp are checked before dispatch. The acting user
is identified as ``fc_{fid}``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from creatorshare.config import settings
from creatorshare.exceptions import (
    FrameActionError,
    FrameNotFoundError,
    FrameValidationError,
)
from creatorshare.models.content import (
    ContentPiece,
    EnhancementCreate,
    EnhancementType,
    RemixCreate,
)
from creatorshare.models.frame import (
    BUTTON_ACTIONS,
    FrameAction,
    FrameActionResult,
    FrameWebhookPayload,
)

if TYPE_CHECKING:
    from creatorshare.database.store import LedgerStore
    from creatorshare.services.notifications import NotificationService
    from creatorshare.services.polls import PollVotingEngine

logger = structlog.get_logger(__name__)

CONTENT_URL_PATTERN = re.compile(r"content/(content_[^/?]+)")

DEFAULT_REMIX_DESCRIPTION = "Remix created via Farcaster"
DEFAULT_ENHANCEMENT_DETAILS = "Enhancement requested via Farcaster"
REMIX_DESCRIPTION_MAX = 300
ENHANCEMENT_DETAILS_MAX = 200


def extract_content_id(url: str) -> str | None:
    """Pull a content id out of a frame URL such as ``https://host/content/content_...``."""
    match = CONTENT_URL_PATTERN.search(url)
    return match.group(1) if match else None


def frame_user_id(fid: int) -> str:
    return f"fc_{fid}"


class FrameActionDispatcher:
    """Validates frame messages and routes them by button index."""

    def __init__(
        self,
        store: LedgerStore,
        polls: PollVotingEngine,
        notifications: NotificationService | None = None,
        clock: Callable[[], datetime] | None = None,
        max_age_seconds: int | None = None,
    ) -> None:
        self._store = store
        self._polls = polls
        self._notifications = notifications
        self._clock = clock or store.now
        self._max_age_seconds = (
            max_age_seconds
            if max_age_seconds is not None
            else settings.frame_message_max_age_seconds
        )

    def validate_frame_message(self, payload: FrameWebhookPayload) -> bool:
        """Required fields present and timestamp within the allowed age, either direction."""
        data = payload.untrusted_data
        if not data.fid or not data.url or not data.message_hash:
            return False

        age = abs(self._clock().timestamp() - data.timestamp)
        return age < self._max_age_seconds

    def dispatch(self, payload: FrameWebhookPayload) -> FrameActionResult:
        """
        Perform the action bound to the pressed button.

        Raises:
            FrameValidationError: The message failed validation
            FrameActionError: Unknown button, missing id or rejected vote
            FrameNotFoundError: The referenced content does not exist
        """
        if not self.validate_frame_message(payload):
            logger.warning(
                "frame_message_invalid",
                fid=payload.untrusted_data.fid,
                timestamp=payload.untrusted_data.timestamp,
            )
            raise FrameValidationError()

        data = payload.untrusted_data
        action = BUTTON_ACTIONS.get(data.button_index)
        if action is None:
            raise FrameActionError("Unknown action")

        user_id = frame_user_id(data.fid)
        log = logger.bind(fid=data.fid, action=action.value)
        log.info("frame_action_received", button_index=data.button_index)

        if action == FrameAction.CONFIGURE_REVENUE:
            return self._configure_revenue(payload)
        if action == FrameAction.CREATE_REMIX:
            return self._create_remix(payload, user_id)
        if action == FrameAction.PURCHASE_ENHANCEMENT:
            return self._purchase_enhancement(payload, user_id)
        return self._vote_on_poll(payload, user_id)

    # ═══════════════════════════════════════════════════════════════
    # ACTIONS
    # ═══════════════════════════════════════════════════════════════

    def _resolve_content(self, payload: FrameWebhookPayload) -> ContentPiece:
        data = payload.untrusted_data
        content_id = data.state or extract_content_id(data.url)
        if not content_id:
            raise FrameActionError("Content ID not found")

        content = self._store.get_content(content_id)
        if content is None:
            raise FrameNotFoundError()
        return content

    def _configure_revenue(self, payload: FrameWebhookPayload) -> FrameActionResult:
        content = self._resolve_content(payload)
        return FrameActionResult(
            action=FrameAction.CONFIGURE_REVENUE,
            message="Revenue share configuration initiated",
            data={
                "content_id": content.content_id,
                "current_percentage": content.revenue_share_percentage,
            },
        )

    def _create_remix(self, payload: FrameWebhookPayload, user_id: str) -> FrameActionResult:
        content = self._resolve_content(payload)
        description = payload.untrusted_data.input_text or DEFAULT_REMIX_DESCRIPTION

        remix = self._store.create_remix(
            RemixCreate(
                original_content_id=content.content_id,
                remix_content_url="",
                description=description[:REMIX_DESCRIPTION_MAX],
                revenue_share_percentage=settings.default_remix_share_percentage,
            ),
            remixing_creator_id=user_id,
        )
        if self._notifications is not None:
            self._notifications.content_remixed(content, remix)

        return FrameActionResult(
            action=FrameAction.CREATE_REMIX,
            message="Remix request submitted",
            data={"remix_id": remix.remix_id, "content_id": content.content_id},
        )

    def _purchase_enhancement(
        self,
        payload: FrameWebhookPayload,
        user_id: str,
    ) -> FrameActionResult:
        content = self._resolve_content(payload)
        details = payload.untrusted_data.input_text or DEFAULT_ENHANCEMENT_DETAILS

        enhancement = self._store.create_enhancement(
            EnhancementCreate(
                content_id=content.content_id,
                enhancement_type=EnhancementType.CUSTOM,
                enhancement_details=details[:ENHANCEMENT_DETAILS_MAX],
                cost=settings.default_enhancement_cost,
            ),
            applied_by_creator_id=user_id,
        )
        if self._notifications is not None:
            self._notifications.enhancement_applied(content, enhancement)

        return FrameActionResult(
            action=FrameAction.PURCHASE_ENHANCEMENT,
            message="Enhancement request submitted",
            data={
                "enhancement_id": enhancement.enhancement_id,
                "content_id": content.content_id,
            },
        )

    def _vote_on_poll(self, payload: FrameWebhookPayload, user_id: str) -> FrameActionResult:
        data = payload.untrusted_data
        poll_id = data.state
        if not poll_id:
            raise FrameActionError("Poll ID not found")

        # The pressed button doubles as the option selector
        option_index = data.button_index - 1
        if not self._polls.vote_on_poll(poll_id, user_id, option_index):
            raise FrameActionError("Failed to vote on poll")

        return FrameActionResult(
            action=FrameAction.VOTE_POLL,
            message="Vote recorded successfully",
            data={"poll_id": poll_id, "option_index": option_index},
        )


__all__ = [
    "CONTENT_URL_PATTERN",
    "FrameActionDispatcher",
    "extract_content_id",
    "frame_user_id",
]
