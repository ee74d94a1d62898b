"""
Content Models

Content pieces with their revenue-share configuration, plus the derived
works that reference them: remixes and paid enhancements.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, ValidationInfo, field_validator

from creatorshare.models.base import (
    MAX_CONTENT_SHARE,
    MAX_REMIX_SHARE,
    LedgerModel,
    context_setting,
    utc_now,
    validate_tags,
    validate_url,
)

class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"


class ContentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class EnhancementType(str, Enum):
    FILTER = "filter"      # Visual filter
    EFFECT = "effect"      # Special effect / animation
    OVERLAY = "overlay"    # Text overlay, captions, branding
    TEXT = "text"          # Typography
    AUDIO = "audio"        # Background music or sound effects
    CUSTOM = "custom"      # Unique modifications


# ═══════════════════════════════════════════════════════════════
# CONTENT
# ═══════════════════════════════════════════════════════════════


class ContentPiece(LedgerModel):
    """
    A unit of creative work.

    ``remix_count`` and ``engagement_count`` are derived counters owned by
    the relationship maintainer; ``content_id`` and ``creation_timestamp``
    are fixed at insert time.
    """

    content_id: str
    creator_id: str

    title: str = Field(min_length=1, max_length=100)
    description: str = Field(max_length=500)
    media_url: str
    media_type: MediaType

    monetization_enabled: bool = False
    current_revenue: float = Field(default=0.0, ge=0)
    revenue_share_percentage: float = Field(ge=0, le=MAX_CONTENT_SHARE)

    status: ContentStatus = ContentStatus.PUBLISHED
    category: str = Field(max_length=50)
    tags: list[str] = Field(default_factory=list)

    is_remix: bool = False
    original_content_id: str | None = None

    ipfs_hash: str | None = None
    arweave_hash: str | None = None

    remix_count: int = Field(default=0, ge=0)
    engagement_count: int = Field(default=0, ge=0)
    creation_timestamp: datetime = Field(default_factory=utc_now)

    @property
    def is_monetizable(self) -> bool:
        return (
            self.monetization_enabled
            and self.status == ContentStatus.PUBLISHED
            and self.revenue_share_percentage > 0
        )


class ContentCreate(LedgerModel):
    """Request to publish a new content piece."""

    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    media_url: str
    media_type: MediaType
    monetization_enabled: bool
    revenue_share_percentage: float = Field(ge=0, le=MAX_CONTENT_SHARE)
    tags: list[str] = Field(default_factory=list)
    category: str = Field(min_length=1, max_length=50)

    @field_validator("media_url")
    @classmethod
    def check_media_url(cls, v: str) -> str:
        return validate_url(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str], info: ValidationInfo) -> list[str]:
        return validate_tags(
            v,
            context_setting(info, "max_tags_per_content"),
            context_setting(info, "max_tag_length"),
        )


class ContentUpdate(LedgerModel):
    """
    Mutable content fields.

    ``content_id``, ``creator_id``, ``creation_timestamp`` and the derived
    counters are not declared here, so a raw payload carrying them is
    validated down to the fields below and those keys never reach the
    stored record.
    """

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    media_url: str | None = None
    media_type: MediaType | None = None
    monetization_enabled: bool | None = None
    revenue_share_percentage: float | None = Field(default=None, ge=0, le=MAX_CONTENT_SHARE)
    status: ContentStatus | None = None
    category: str | None = Field(default=None, min_length=1, max_length=50)
    tags: list[str] | None = None
    ipfs_hash: str | None = None
    arweave_hash: str | None = None

    @field_validator("media_url")
    @classmethod
    def check_media_url(cls, v: str | None) -> str | None:
        return validate_url(v) if v is not None else v

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str] | None, info: ValidationInfo) -> list[str] | None:
        if v is None:
            return v
        return validate_tags(
            v,
            context_setting(info, "max_tags_per_content"),
            context_setting(info, "max_tag_length"),
        )


class RevenueShareUpdate(LedgerModel):
    revenue_share_percentage: float = Field(ge=0, le=MAX_CONTENT_SHARE)


# ═══════════════════════════════════════════════════════════════
# REMIXES
# ═══════════════════════════════════════════════════════════════


class Remix(LedgerModel):
    """A derivative work proposed against an original piece."""

    remix_id: str
    original_content_id: str
    remixing_creator_id: str
    remix_content_url: str = ""
    description: str = ""
    revenue_share_percentage: float = Field(ge=0, le=MAX_REMIX_SHARE)
    approved: bool = False
    ipfs_hash: str | None = None
    arweave_hash: str | None = None
    remix_timestamp: datetime = Field(default_factory=utc_now)


class RemixCreate(LedgerModel):
    """
    Request to remix an existing piece.

    ``remix_content_url`` may be empty when the remix is proposed first
    and its media supplied in a follow-up interaction.
    """

    original_content_id: str = Field(min_length=1)
    remix_content_url: str = ""
    description: str = Field(min_length=1, max_length=300)
    revenue_share_percentage: float = Field(ge=0, le=MAX_REMIX_SHARE)

    @field_validator("remix_content_url")
    @classmethod
    def check_remix_url(cls, v: str) -> str:
        return validate_url(v) if v else v


# ═══════════════════════════════════════════════════════════════
# ENHANCEMENTS
# ═══════════════════════════════════════════════════════════════


class Enhancement(LedgerModel):
    """A paid modification applied to a piece."""

    enhancement_id: str
    content_id: str
    applied_by_creator_id: str
    enhancement_type: EnhancementType
    enhancement_details: str = ""
    cost: float = Field(ge=0)
    approved: bool = False
    ipfs_hash: str | None = None
    applied_timestamp: datetime = Field(default_factory=utc_now)


class EnhancementCreate(LedgerModel):
    content_id: str = Field(min_length=1)
    enhancement_type: EnhancementType
    enhancement_details: str = Field(min_length=1, max_length=200)
    cost: float = Field(ge=0)
