"""
Notification Service

Raises in-app notifications for ledger activity and serves a user's
inbox. Notifications live in the ledger store; this service only builds
them with consistent titles, messages and action links.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from creatorshare.config import settings
from creatorshare.models.content import ContentPiece, Enhancement, Remix
from creatorshare.models.ledger import Transaction
from creatorshare.models.notifications import (
    NOTIFICATION_TITLES,
    Notification,
    NotificationCreate,
    NotificationType,
)
from creatorshare.models.poll import CommunityPoll

if TYPE_CHECKING:
    from creatorshare.database.store import LedgerStore

logger = structlog.get_logger(__name__)


class NotificationService:
    """Builds and stores notifications; reads a user's inbox."""

    def __init__(self, store: LedgerStore, base_url: str | None = None) -> None:
        self._store = store
        self._base_url = (base_url or settings.frame_base_url).rstrip("/")

    def _content_url(self, content_id: str) -> str:
        return f"{self._base_url}/content/{content_id}"

    def notify(
        self,
        user_id: str,
        notification_type: NotificationType,
        message: str,
        title: str | None = None,
        action_url: str | None = None,
    ) -> Notification:
        notification = self._store.create_notification(
            NotificationCreate(
                user_id=user_id,
                type=notification_type,
                title=title or NOTIFICATION_TITLES[notification_type],
                message=message,
                action_url=action_url,
            )
        )
        logger.info(
            "notification_sent",
            notification_id=notification.notification_id,
            user_id=user_id,
            type=notification.type,
        )
        return notification

    # ═══════════════════════════════════════════════════════════════
    # LEDGER EVENTS
    # ═══════════════════════════════════════════════════════════════

    def content_remixed(self, original: ContentPiece, remix: Remix) -> Notification | None:
        """Tell the original creator about a remix proposal (not their own)."""
        if remix.remixing_creator_id == original.creator_id:
            return None
        return self.notify(
            original.creator_id,
            NotificationType.CONTENT_REMIXED,
            f'"{original.title}" was remixed with a '
            f"{remix.revenue_share_percentage:g}% revenue share proposal.",
            action_url=self._content_url(original.content_id),
        )

    def enhancement_applied(
        self,
        content: ContentPiece,
        enhancement: Enhancement,
    ) -> Notification | None:
        if enhancement.applied_by_creator_id == content.creator_id:
            return None
        return self.notify(
            content.creator_id,
            NotificationType.ENHANCEMENT_APPLIED,
            f'A {enhancement.enhancement_type} enhancement was purchased for "{content.title}".',
            action_url=self._content_url(content.content_id),
        )

    def revenue_received(self, transaction: Transaction) -> Notification | None:
        """Notify the receiving creator of a completed transaction, if they are registered."""
        recipient = self._store.get_creator_by_wallet(transaction.to_wallet)
        if recipient is None:
            return None
        return self.notify(
            recipient.creator_id,
            NotificationType.REVENUE_RECEIVED,
            f"You received {transaction.amount:g} ({transaction.transaction_type}).",
            action_url=self._content_url(transaction.content_id),
        )

    def poll_ended(self, poll: CommunityPoll, counts: list[int]) -> Notification:
        leader = max(range(len(counts)), key=counts.__getitem__) if any(counts) else None
        if leader is None:
            message = f'Your poll "{poll.question}" ended with no votes.'
        else:
            message = (
                f'Your poll "{poll.question}" ended. '
                f'Top option: "{poll.options[leader]}" with {counts[leader]} vote(s).'
            )
        action_url = self._content_url(poll.content_id) if poll.content_id else None
        return self.notify(
            poll.creator_id,
            NotificationType.POLL_ENDED,
            message,
            action_url=action_url,
        )

    # ═══════════════════════════════════════════════════════════════
    # INBOX
    # ═══════════════════════════════════════════════════════════════

    def get_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
    ) -> list[Notification]:
        notifications = self._store.get_notifications_by_user(user_id)
        if unread_only:
            notifications = [n for n in notifications if not n.read]
        return notifications[:limit]

    def get_unread_count(self, user_id: str) -> int:
        return self._store.get_unread_count(user_id)

    def mark_as_read(self, notification_id: str, user_id: str) -> bool:
        """Mark one of the user's notifications read. False if missing or not theirs."""
        notification = self._store.get_notification(notification_id)
        if notification is None or notification.user_id != user_id:
            return False
        return self._store.mark_notification_as_read(notification_id)
