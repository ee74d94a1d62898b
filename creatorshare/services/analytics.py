"""
Analytics Service

Per-content activity summaries and platform-wide revenue statistics,
computed on demand from store snapshots.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from creatorshare.models.content import ContentPiece, ContentStatus
from creatorshare.models.ledger import (
    ContentAnalytics,
    RevenueStats,
    TransactionStatus,
    TransactionType,
)

if TYPE_CHECKING:
    from creatorshare.database.store import LedgerStore

logger = structlog.get_logger(__name__)

GROWTH_WINDOW = timedelta(days=30)

# Engagement score weights
LIKE_WEIGHT = 1.0
COMMENT_WEIGHT = 2.0
SHARE_WEIGHT = 3.0
VIEW_WEIGHT = 0.1


def calculate_revenue_share(total_amount: float, percentage: float) -> float:
    """Portion of ``total_amount`` allocated by a revenue-share percentage."""
    return total_amount * percentage / 100


def calculate_engagement_score(likes: int, comments: int, shares: int, views: int) -> float:
    return (
        likes * LIKE_WEIGHT
        + comments * COMMENT_WEIGHT
        + shares * SHARE_WEIGHT
        + views * VIEW_WEIGHT
    )


def is_content_monetizable(content: ContentPiece) -> bool:
    return content.is_monetizable


def growth_percentage(current: float, previous: float) -> float:
    """
    Percent change from ``previous`` to ``current``.

    With no previous revenue, any current revenue counts as 100% growth.
    """
    if previous > 0:
        return round((current - previous) / previous * 100, 2)
    return 100.0 if current > 0 else 0.0


class AnalyticsService:
    """Aggregate views over a ledger store."""

    def __init__(self, store: LedgerStore, clock: Callable[[], datetime] | None = None) -> None:
        self._store = store
        self._clock = clock or store.now

    def get_content_analytics(self, content_id: str) -> ContentAnalytics | None:
        """
        Activity summary for one piece.

        ``views`` is the engagement counter maintained on the piece;
        ``engagement`` counts engagement records; ``revenue`` sums every
        transaction recorded against the piece.
        """
        content = self._store.get_content(content_id)
        if content is None:
            return None

        transactions = self._store.get_transactions_by_content(content_id)
        return ContentAnalytics(
            content_id=content_id,
            views=content.engagement_count,
            engagement=len(self._store.get_engagements_by_content(content_id)),
            revenue=sum(t.amount for t in transactions),
            remixes=len(self._store.get_remixes_by_content(content_id)),
            enhancements=len(self._store.get_enhancements_by_content(content_id)),
        )

    def get_revenue_stats(self, now: datetime | None = None) -> RevenueStats:
        """
        Platform revenue summary.

        Only completed transactions count as revenue. Monthly growth
        compares the last 30 days against the 30 days before them.
        """
        now = now or self._clock()
        transactions = self._store.list_transactions()
        completed = [t for t in transactions if t.status == TransactionStatus.COMPLETED]

        current_start = now - GROWTH_WINDOW
        previous_start = current_start - GROWTH_WINDOW
        current = sum(t.amount for t in completed if current_start < t.timestamp <= now)
        previous = sum(
            t.amount for t in completed if previous_start < t.timestamp <= current_start
        )

        active_creators = {
            c.creator_id
            for c in self._store.list_content()
            if c.status == ContentStatus.PUBLISHED
        }

        stats = RevenueStats(
            total_revenue=sum(t.amount for t in completed),
            monthly_growth=growth_percentage(current, previous),
            active_creators=len(active_creators),
            total_shares=sum(
                1 for t in transactions if t.transaction_type == TransactionType.REVENUE_SHARE
            ),
            pending_distributions=sum(
                1 for t in transactions if t.status == TransactionStatus.PENDING
            ),
            total_transactions=len(transactions),
            generated_at=now,
        )
        logger.debug(
            "revenue_stats_computed",
            total_revenue=stats.total_revenue,
            total_transactions=stats.total_transactions,
        )
        return stats
