"""
Ledger Store

In-memory owner of every CreatorShare entity collection.

Records are immutable-by-replacement: an update builds a new model and
swaps it in under the same key, so a record handed to a caller never
changes underneath it. A single re-entrant lock guards all collections;
operations that touch related entities run their relationship updates
inside the same critical section as the triggering create.

Lookups that miss return None (or an empty list / False). The store
never raises for an absent record.
"""

import threading
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any

import structlog

from creatorshare.database.relationships import RelationshipMaintainer
from creatorshare.exceptions import IdentifierCollisionError
from creatorshare.models.base import generate_id, utc_now
from creatorshare.models.content import (
    ContentCreate,
    ContentPiece,
    ContentStatus,
    ContentUpdate,
    Enhancement,
    EnhancementCreate,
    Remix,
    RemixCreate,
)
from creatorshare.models.creator import Creator, CreatorCreate, CreatorUpdate
from creatorshare.models.ledger import (
    Engagement,
    EngagementCreate,
    Transaction,
    TransactionCreate,
)
from creatorshare.models.notifications import Notification, NotificationCreate
from creatorshare.models.poll import CommunityPoll, PollCreate

logger = structlog.get_logger(__name__)

# Attempts before a colliding id source is treated as broken
MAX_ID_ATTEMPTS = 5


class LedgerStore:
    """
    Owns Creator, Content, Remix, Enhancement, Transaction, Engagement,
    Poll and Notification records.

    One instance per application (held on ``app.state``) or per test.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[str], str] = generate_id,
    ) -> None:
        self._clock = clock or utc_now
        self._id_factory = id_factory
        self._lock = threading.RLock()

        self._creators: dict[str, Creator] = {}
        self._content: dict[str, ContentPiece] = {}
        self._remixes: dict[str, Remix] = {}
        self._enhancements: dict[str, Enhancement] = {}
        self._transactions: dict[str, Transaction] = {}
        self._engagements: dict[str, Engagement] = {}
        self._polls: dict[str, CommunityPoll] = {}
        self._notifications: dict[str, Notification] = {}

        self._relationships = RelationshipMaintainer(
            content=self._content,
            creators=self._creators,
            clock=self._clock,
        )

    def now(self) -> datetime:
        return self._clock()

    def locked(self) -> threading.RLock:
        """The store lock, for callers composing several operations atomically."""
        return self._lock

    def _new_id(self, kind: str, existing: Mapping[str, Any]) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory(kind)
            if candidate not in existing:
                return candidate
            logger.warning("identifier_collision", kind=kind, identifier=candidate)
        raise IdentifierCollisionError(
            f"Could not generate a unique {kind} id after {MAX_ID_ATTEMPTS} attempts"
        )

    # ═══════════════════════════════════════════════════════════════
    # CREATORS
    # ═══════════════════════════════════════════════════════════════

    def create_creator(self, creator_id: str, data: CreatorCreate) -> Creator | None:
        """Register a creator under a caller-supplied id. None if the id is taken."""
        with self._lock:
            if creator_id in self._creators:
                return None

            now = self._clock()
            creator = Creator(
                creator_id=creator_id,
                **data.model_dump(),
                created_at=now,
                updated_at=now,
            )
            self._creators[creator_id] = creator

        logger.info("creator_created", creator_id=creator_id)
        return creator

    def get_creator(self, creator_id: str) -> Creator | None:
        with self._lock:
            return self._creators.get(creator_id)

    def get_creator_by_wallet(self, wallet_address: str) -> Creator | None:
        wallet = wallet_address.lower()
        with self._lock:
            for creator in self._creators.values():
                if creator.wallet_address.lower() == wallet:
                    return creator
        return None

    def list_creators(self) -> list[Creator]:
        with self._lock:
            return list(self._creators.values())

    def update_creator(
        self,
        creator_id: str,
        update: CreatorUpdate | Mapping[str, Any],
    ) -> Creator | None:
        if not isinstance(update, CreatorUpdate):
            update = CreatorUpdate.model_validate(update)
        fields = update.model_dump(exclude_unset=True, exclude_none=True)

        with self._lock:
            creator = self._creators.get(creator_id)
            if creator is None:
                return None

            updated = creator.model_copy(update={**fields, "updated_at": self._clock()})
            self._creators[creator_id] = updated

        logger.info("creator_updated", creator_id=creator_id, fields=sorted(fields))
        return updated

    # ═══════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════

    def create_content(
        self,
        data: ContentCreate,
        creator_id: str,
        status: ContentStatus = ContentStatus.PUBLISHED,
        is_remix: bool = False,
        original_content_id: str | None = None,
    ) -> ContentPiece:
        """Store a new piece with a fresh id, zeroed counters and ``now`` as its timestamp."""
        with self._lock:
            content = ContentPiece(
                content_id=self._new_id("content", self._content),
                creator_id=creator_id,
                **data.model_dump(),
                status=status,
                is_remix=is_remix,
                original_content_id=original_content_id,
                creation_timestamp=self._clock(),
            )
            self._content[content.content_id] = content
            self._relationships.content_created(content)

        logger.info(
            "content_created",
            content_id=content.content_id,
            creator_id=creator_id,
            revenue_share=content.revenue_share_percentage,
        )
        return content

    def get_content(self, content_id: str) -> ContentPiece | None:
        with self._lock:
            return self._content.get(content_id)

    def get_content_by_creator(self, creator_id: str) -> list[ContentPiece]:
        with self._lock:
            return [c for c in self._content.values() if c.creator_id == creator_id]

    def list_content(self) -> list[ContentPiece]:
        with self._lock:
            return list(self._content.values())

    def update_content(
        self,
        content_id: str,
        update: ContentUpdate | Mapping[str, Any],
    ) -> ContentPiece | None:
        """
        Merge mutable fields into a piece.

        A raw mapping is validated through ``ContentUpdate`` first, which
        drops identity, timestamp and counter keys and enforces the
        percentage bounds (raising ``ValidationError``).
        """
        if not isinstance(update, ContentUpdate):
            update = ContentUpdate.model_validate(update)
        fields = update.model_dump(exclude_unset=True, exclude_none=True)

        with self._lock:
            content = self._content.get(content_id)
            if content is None:
                return None

            updated = content.model_copy(update=fields)
            self._content[content_id] = updated

        logger.info("content_updated", content_id=content_id, fields=sorted(fields))
        return updated

    # ═══════════════════════════════════════════════════════════════
    # REMIXES
    # ═══════════════════════════════════════════════════════════════

    def create_remix(self, data: RemixCreate, remixing_creator_id: str) -> Remix:
        """
        Record a remix proposal and bump the original's ``remix_count``.

        The remix is stored even when the original piece does not exist.
        """
        with self._lock:
            remix = Remix(
                remix_id=self._new_id("remix", self._remixes),
                remixing_creator_id=remixing_creator_id,
                **data.model_dump(),
                approved=False,
                remix_timestamp=self._clock(),
            )
            self._remixes[remix.remix_id] = remix
            self._relationships.remix_created(remix)

        logger.info(
            "remix_created",
            remix_id=remix.remix_id,
            original_content_id=remix.original_content_id,
            remixing_creator_id=remixing_creator_id,
        )
        return remix

    def get_remix(self, remix_id: str) -> Remix | None:
        with self._lock:
            return self._remixes.get(remix_id)

    def get_remixes_by_content(self, content_id: str) -> list[Remix]:
        with self._lock:
            return [r for r in self._remixes.values() if r.original_content_id == content_id]

    def approve_remix(self, remix_id: str) -> Remix | None:
        with self._lock:
            remix = self._remixes.get(remix_id)
            if remix is None:
                return None
            approved = remix.model_copy(update={"approved": True})
            self._remixes[remix_id] = approved

        logger.info("remix_approved", remix_id=remix_id)
        return approved

    # ═══════════════════════════════════════════════════════════════
    # ENHANCEMENTS
    # ═══════════════════════════════════════════════════════════════

    def create_enhancement(
        self,
        data: EnhancementCreate,
        applied_by_creator_id: str,
    ) -> Enhancement:
        with self._lock:
            enhancement = Enhancement(
                enhancement_id=self._new_id("enhancement", self._enhancements),
                applied_by_creator_id=applied_by_creator_id,
                **data.model_dump(),
                approved=False,
                applied_timestamp=self._clock(),
            )
            self._enhancements[enhancement.enhancement_id] = enhancement

        logger.info(
            "enhancement_created",
            enhancement_id=enhancement.enhancement_id,
            content_id=enhancement.content_id,
            cost=enhancement.cost,
        )
        return enhancement

    def get_enhancement(self, enhancement_id: str) -> Enhancement | None:
        with self._lock:
            return self._enhancements.get(enhancement_id)

    def get_enhancements_by_content(self, content_id: str) -> list[Enhancement]:
        with self._lock:
            return [e for e in self._enhancements.values() if e.content_id == content_id]

    def approve_enhancement(self, enhancement_id: str) -> Enhancement | None:
        with self._lock:
            enhancement = self._enhancements.get(enhancement_id)
            if enhancement is None:
                return None
            approved = enhancement.model_copy(update={"approved": True})
            self._enhancements[enhancement_id] = approved

        logger.info("enhancement_approved", enhancement_id=enhancement_id)
        return approved

    # ═══════════════════════════════════════════════════════════════
    # TRANSACTIONS (append-only)
    # ═══════════════════════════════════════════════════════════════

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        with self._lock:
            transaction = Transaction(
                transaction_id=self._new_id("tx", self._transactions),
                **data.model_dump(),
                timestamp=self._clock(),
            )
            self._transactions[transaction.transaction_id] = transaction
            self._relationships.transaction_created(transaction)

        logger.info(
            "transaction_created",
            transaction_id=transaction.transaction_id,
            content_id=transaction.content_id,
            amount=transaction.amount,
            status=transaction.status,
        )
        return transaction

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        with self._lock:
            return self._transactions.get(transaction_id)

    def get_transactions_by_content(self, content_id: str) -> list[Transaction]:
        with self._lock:
            return [t for t in self._transactions.values() if t.content_id == content_id]

    def get_transactions_by_wallet(self, wallet_address: str) -> list[Transaction]:
        """Transactions sent from or received by a wallet."""
        wallet = wallet_address.lower()
        with self._lock:
            return [
                t
                for t in self._transactions.values()
                if t.from_wallet.lower() == wallet or t.to_wallet.lower() == wallet
            ]

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return list(self._transactions.values())

    # ═══════════════════════════════════════════════════════════════
    # ENGAGEMENTS (append-only)
    # ═══════════════════════════════════════════════════════════════

    def create_engagement(self, data: EngagementCreate, user_id: str) -> Engagement:
        with self._lock:
            engagement = Engagement(
                engagement_id=self._new_id("engagement", self._engagements),
                user_id=user_id,
                **data.model_dump(),
                timestamp=self._clock(),
            )
            self._engagements[engagement.engagement_id] = engagement
            self._relationships.engagement_created(engagement)

        logger.debug(
            "engagement_created",
            engagement_id=engagement.engagement_id,
            content_id=engagement.content_id,
            engagement_type=engagement.engagement_type,
        )
        return engagement

    def get_engagements_by_content(self, content_id: str) -> list[Engagement]:
        with self._lock:
            return [e for e in self._engagements.values() if e.content_id == content_id]

    # ═══════════════════════════════════════════════════════════════
    # POLLS
    # ═══════════════════════════════════════════════════════════════

    def create_poll(self, data: PollCreate, creator_id: str) -> CommunityPoll:
        with self._lock:
            now = self._clock()
            poll = CommunityPoll(
                poll_id=self._new_id("poll", self._polls),
                creator_id=creator_id,
                content_id=data.content_id,
                question=data.question,
                options=list(data.options),
                end_time=now + timedelta(seconds=data.duration_seconds),
                created_at=now,
            )
            self._polls[poll.poll_id] = poll

        logger.info(
            "poll_created",
            poll_id=poll.poll_id,
            creator_id=creator_id,
            options=len(poll.options),
            end_time=poll.end_time.isoformat(),
        )
        return poll

    def get_poll(self, poll_id: str) -> CommunityPoll | None:
        with self._lock:
            return self._polls.get(poll_id)

    def get_polls_by_creator(self, creator_id: str) -> list[CommunityPoll]:
        with self._lock:
            return [p for p in self._polls.values() if p.creator_id == creator_id]

    def list_polls(self) -> list[CommunityPoll]:
        with self._lock:
            return list(self._polls.values())

    def replace_poll(self, poll: CommunityPoll) -> bool:
        """Swap in a new version of an existing poll. False if the poll is unknown."""
        with self._lock:
            if poll.poll_id not in self._polls:
                return False
            self._polls[poll.poll_id] = poll
        return True

    # ═══════════════════════════════════════════════════════════════
    # NOTIFICATIONS
    # ═══════════════════════════════════════════════════════════════

    def create_notification(self, data: NotificationCreate) -> Notification:
        with self._lock:
            notification = Notification(
                notification_id=self._new_id("notification", self._notifications),
                **data.model_dump(),
                created_at=self._clock(),
            )
            self._notifications[notification.notification_id] = notification

        logger.debug(
            "notification_created",
            notification_id=notification.notification_id,
            user_id=notification.user_id,
            type=notification.type,
        )
        return notification

    def get_notification(self, notification_id: str) -> Notification | None:
        with self._lock:
            return self._notifications.get(notification_id)

    def get_notifications_by_user(self, user_id: str) -> list[Notification]:
        """A user's notifications, newest first."""
        with self._lock:
            mine = [n for n in self._notifications.values() if n.user_id == user_id]
        return sorted(mine, key=lambda n: n.created_at, reverse=True)

    def get_unread_count(self, user_id: str) -> int:
        with self._lock:
            return sum(
                1 for n in self._notifications.values() if n.user_id == user_id and not n.read
            )

    def mark_notification_as_read(self, notification_id: str) -> bool:
        """Mark read. Repeating the call is a no-op that still returns True."""
        with self._lock:
            notification = self._notifications.get(notification_id)
            if notification is None:
                return False
            if not notification.read:
                self._notifications[notification_id] = notification.model_copy(
                    update={"read": True, "read_at": self._clock()}
                )
        return True
