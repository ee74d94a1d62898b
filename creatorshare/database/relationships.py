"""
Relationship Maintainer

Keeps derived counters and aggregates in step with the records they are
derived from. Every hook is called by the store while it holds its lock,
inside the same operation that created the triggering record, so no
reader can observe the record without the counter change.

References to missing content or creators are tolerated: the triggering
record is still stored and only the side that exists is updated.
"""

from collections.abc import Callable
from datetime import datetime

import structlog

from creatorshare.models.content import ContentPiece, Remix
from creatorshare.models.creator import Creator
from creatorshare.models.ledger import Engagement, Transaction, TransactionStatus

logger = structlog.get_logger(__name__)


class RelationshipMaintainer:
    """Applies counter side effects to the store's content and creator maps."""

    def __init__(
        self,
        content: dict[str, ContentPiece],
        creators: dict[str, Creator],
        clock: Callable[[], datetime],
    ) -> None:
        self._content = content
        self._creators = creators
        self._clock = clock

    def content_created(self, content: ContentPiece) -> bool:
        """Count a new piece against its creator's ``total_content``."""
        creator = self._creators.get(content.creator_id)
        if creator is None:
            return False

        self._creators[creator.creator_id] = creator.model_copy(
            update={
                "total_content": creator.total_content + 1,
                "updated_at": self._clock(),
            }
        )
        return True

    def remix_created(self, remix: Remix) -> bool:
        """Increment ``remix_count`` on the original piece, if it exists."""
        applied = self._increment(remix.original_content_id, "remix_count")
        if not applied:
            logger.debug(
                "remix_references_missing_content",
                remix_id=remix.remix_id,
                original_content_id=remix.original_content_id,
            )
        return applied

    def engagement_created(self, engagement: Engagement) -> bool:
        """Increment ``engagement_count`` on the target piece, if it exists."""
        applied = self._increment(engagement.content_id, "engagement_count")
        if not applied:
            logger.debug(
                "engagement_references_missing_content",
                engagement_id=engagement.engagement_id,
                content_id=engagement.content_id,
            )
        return applied

    def transaction_created(self, transaction: Transaction) -> bool:
        """
        Credit a completed transaction.

        The amount is added to the content's ``current_revenue`` and to the
        ``total_revenue`` of the creator whose wallet received it. Pending
        and failed transactions have no side effects.
        """
        if transaction.status != TransactionStatus.COMPLETED:
            return False

        credited = False
        content = self._content.get(transaction.content_id)
        if content is not None:
            self._content[content.content_id] = content.model_copy(
                update={"current_revenue": content.current_revenue + transaction.amount}
            )
            credited = True

        recipient = self._find_creator_by_wallet(transaction.to_wallet)
        if recipient is not None:
            self._creators[recipient.creator_id] = recipient.model_copy(
                update={
                    "total_revenue": recipient.total_revenue + transaction.amount,
                    "updated_at": self._clock(),
                }
            )
            credited = True

        return credited

    def _increment(self, content_id: str, counter: str) -> bool:
        content = self._content.get(content_id)
        if content is None:
            return False

        self._content[content_id] = content.model_copy(
            update={counter: getattr(content, counter) + 1}
        )
        return True

    def _find_creator_by_wallet(self, wallet: str) -> Creator | None:
        wallet = wallet.lower()
        for creator in self._creators.values():
            if creator.wallet_address.lower() == wallet:
                return creator
        return None
