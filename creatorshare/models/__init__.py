"""
CreatorShare Models

Pydantic models for all ledger entities.
"""

from creatorshare.models.base import (
    ApiResponse,
    LedgerModel,
    PaginatedApiResponse,
    PaginationInfo,
    generate_id,
)
from creatorshare.models.content import (
    ContentCreate,
    ContentPiece,
    ContentStatus,
    ContentUpdate,
    Enhancement,
    EnhancementCreate,
    EnhancementType,
    MediaType,
    Remix,
    RemixCreate,
    RevenueShareUpdate,
)
from creatorshare.models.creator import (
    Creator,
    CreatorCreate,
    CreatorUpdate,
    SocialLinks,
)
from creatorshare.models.frame import (
    FrameAction,
    FrameActionResult,
    FrameButton,
    FrameWebhookPayload,
)
from creatorshare.models.ledger import (
    ContentAnalytics,
    Engagement,
    EngagementCreate,
    EngagementType,
    RevenueStats,
    Transaction,
    TransactionCreate,
    TransactionStatus,
    TransactionType,
)
from creatorshare.models.notifications import (
    Notification,
    NotificationCreate,
    NotificationType,
)
from creatorshare.models.poll import (
    CommunityPoll,
    PollCreate,
    PollStatus,
    PollTally,
    VoteRequest,
)

__all__ = [
    # Base
    "ApiResponse",
    "LedgerModel",
    "PaginatedApiResponse",
    "PaginationInfo",
    "generate_id",
    # Content
    "ContentCreate",
    "ContentPiece",
    "ContentStatus",
    "ContentUpdate",
    "Enhancement",
    "EnhancementCreate",
    "EnhancementType",
    "MediaType",
    "Remix",
    "RemixCreate",
    "RevenueShareUpdate",
    # Creator
    "Creator",
    "CreatorCreate",
    "CreatorUpdate",
    "SocialLinks",
    # Frame
    "FrameAction",
    "FrameActionResult",
    "FrameButton",
    "FrameWebhookPayload",
    # Ledger
    "ContentAnalytics",
    "Engagement",
    "EngagementCreate",
    "EngagementType",
    "RevenueStats",
    "Transaction",
    "TransactionCreate",
    "TransactionStatus",
    "TransactionType",
    # Notifications
    "Notification",
    "NotificationCreate",
    "NotificationType",
    # Polls
    "CommunityPoll",
    "PollCreate",
    "PollStatus",
    "PollTally",
    "VoteRequest",
]
