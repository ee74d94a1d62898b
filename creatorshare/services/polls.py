"""
Poll Voting Engine

One vote per voter per poll, accepted only while the poll is open.

A poll is open when its stored status is active AND the current time is
not past its end time. Expiry is lazy: the stored status of an expired
poll stays active until ``close_expired`` sweeps it, but the end-time
check alone is enough to reject late votes.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from creatorshare.models.poll import CommunityPoll, PollStatus, PollTally

if TYPE_CHECKING:
    from creatorshare.database.store import LedgerStore
    from creatorshare.services.notifications import NotificationService

logger = structlog.get_logger(__name__)


def count_votes(poll: CommunityPoll) -> list[int]:
    """Per-option vote counts, in option order."""
    counts = [0] * len(poll.options)
    for option_index in poll.votes.values():
        if 0 <= option_index < len(counts):
            counts[option_index] += 1
    return counts


class PollVotingEngine:
    """Applies votes to polls held in a ledger store."""

    def __init__(
        self,
        store: LedgerStore,
        notifications: NotificationService | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._notifications = notifications
        self._clock = clock or store.now

    def vote_on_poll(self, poll_id: str, voter_id: str, option_index: int) -> bool:
        """
        Record a vote.

        Returns False, leaving the poll untouched, when the poll does not
        exist, is not active, has passed its end time, the voter has
        already voted, or the option index is out of range. A voter's
        first vote is final.
        """
        with self._store.locked():
            poll = self._store.get_poll(poll_id)
            if poll is None:
                return False

            now = self._clock()
            if not poll.is_open(now):
                logger.debug("vote_rejected_poll_closed", poll_id=poll_id, voter_id=voter_id)
                return False

            if voter_id in poll.votes:
                logger.debug("vote_rejected_duplicate", poll_id=poll_id, voter_id=voter_id)
                return False

            if not 0 <= option_index < len(poll.options):
                logger.debug(
                    "vote_rejected_bad_option",
                    poll_id=poll_id,
                    option_index=option_index,
                )
                return False

            self._store.replace_poll(
                poll.model_copy(update={"votes": {**poll.votes, voter_id: option_index}})
            )

        logger.info("vote_recorded", poll_id=poll_id, voter_id=voter_id, option_index=option_index)
        return True

    def tally(self, poll_id: str) -> PollTally | None:
        poll = self._store.get_poll(poll_id)
        if poll is None:
            return None

        counts = count_votes(poll)
        status = PollStatus.ACTIVE if poll.is_open(self._clock()) else PollStatus.ENDED
        return PollTally(
            poll_id=poll.poll_id,
            question=poll.question,
            options=poll.options,
            counts=counts,
            total_votes=sum(counts),
            status=status,
            end_time=poll.end_time,
        )

    def close_expired(self) -> int:
        """
        Flip active polls past their end time to ended.

        Each closed poll's creator gets a poll-ended notification when a
        notification service is attached. Returns the number closed.
        """
        closed: list[CommunityPoll] = []
        with self._store.locked():
            now = self._clock()
            for poll in self._store.list_polls():
                if poll.status == PollStatus.ACTIVE and now > poll.end_time:
                    ended = poll.model_copy(update={"status": PollStatus.ENDED})
                    self._store.replace_poll(ended)
                    closed.append(ended)

            if self._notifications is not None:
                for poll in closed:
                    self._notifications.poll_ended(poll, count_votes(poll))

        if closed:
            logger.info("polls_closed", count=len(closed))
        return len(closed)
