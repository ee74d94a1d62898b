"""
Community Poll Models
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from creatorshare.models.base import LedgerModel, utc_now

# Allowed poll durations (seconds)
POLL_DURATION_OPTIONS = {
    3600: "1 hour",
    86400: "1 day",
    604800: "1 week",
    2592000: "1 month",
}
MAX_POLL_DURATION_SECONDS = max(POLL_DURATION_OPTIONS)


class PollStatus(str, Enum):
    ACTIVE = "active"
    ENDED = "ended"


class CommunityPoll(LedgerModel):
    """
    A creator-owned poll.

    ``votes`` maps voter id to the chosen option index and is the vote
    ledger itself: one entry per voter, never overwritten.
    """

    poll_id: str
    creator_id: str
    content_id: str | None = None
    question: str = Field(min_length=1, max_length=300)
    options: list[str] = Field(min_length=1)
    votes: dict[str, int] = Field(default_factory=dict)
    end_time: datetime
    status: PollStatus = PollStatus.ACTIVE
    created_at: datetime = Field(default_factory=utc_now)

    def is_open(self, now: datetime) -> bool:
        """The stored status and the end time must both allow voting."""
        return self.status == PollStatus.ACTIVE and now <= self.end_time


class PollCreate(LedgerModel):
    question: str = Field(min_length=1, max_length=300)
    options: list[str] = Field(min_length=2, max_length=10)
    content_id: str | None = None
    duration_seconds: int = Field(default=86400, gt=0, le=MAX_POLL_DURATION_SECONDS)

    @field_validator("options")
    @classmethod
    def check_options(cls, v: list[str]) -> list[str]:
        cleaned = [option.strip() for option in v]
        if any(not option or len(option) > 100 for option in cleaned):
            raise ValueError("Poll options must be 1-100 characters")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Poll options must be unique")
        return cleaned


class VoteRequest(LedgerModel):
    option_index: int = Field(ge=0)


class PollTally(LedgerModel):
    poll_id: str
    question: str
    options: list[str]
    counts: list[int]
    total_votes: int
    status: PollStatus
    end_time: datetime
