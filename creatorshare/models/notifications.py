"""
Notification Models

In-app notifications raised by ledger activity.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from creatorshare.models.base import LedgerModel, utc_now


class NotificationType(str, Enum):
    REVENUE_RECEIVED = "revenue_received"
    CONTENT_REMIXED = "content_remixed"
    ENHANCEMENT_APPLIED = "enhancement_applied"
    POLL_ENDED = "poll_ended"
    SYSTEM = "system"


# Default titles per notification type
NOTIFICATION_TITLES: dict[NotificationType, str] = {
    NotificationType.REVENUE_RECEIVED: "Revenue Received",
    NotificationType.CONTENT_REMIXED: "Content Remixed",
    NotificationType.ENHANCEMENT_APPLIED: "Enhancement Applied",
    NotificationType.POLL_ENDED: "Poll Ended",
    NotificationType.SYSTEM: "System Notification",
}


class Notification(LedgerModel):
    """
    An in-app notification for a user.
    """

    notification_id: str
    user_id: str
    type: NotificationType
    title: str = Field(max_length=200)
    message: str = Field(max_length=2000)
    action_url: str | None = None

    # State
    read: bool = Field(default=False)
    read_at: datetime | None = None

    created_at: datetime = Field(default_factory=utc_now)


class NotificationCreate(LedgerModel):
    user_id: str = Field(min_length=1)
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=2000)
    action_url: str | None = None
