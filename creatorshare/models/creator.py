"""
Creator Models

A creator is keyed by the authenticated user id and carries aggregate
totals maintained by the ledger.
"""

from datetime import datetime

from pydantic import Field, ValidationInfo, field_validator

from creatorshare.models.base import (
    MAX_CONTENT_SHARE,
    LedgerModel,
    context_setting,
    utc_now,
    validate_url,
    validate_wallet_address,
)


class SocialLinks(LedgerModel):
    farcaster: str | None = Field(default=None, max_length=100)
    twitter: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=2048)


class Creator(LedgerModel):
    """A content creator and their aggregate revenue position."""

    creator_id: str = Field(min_length=1)
    wallet_address: str
    display_name: str = Field(min_length=1, max_length=50)
    bio: str = Field(default="", max_length=500)
    profile_image: str | None = None

    revenue_share_percentage: float = Field(default=15.0, ge=0, le=MAX_CONTENT_SHARE)

    # Aggregates (maintained by the ledger)
    total_revenue: float = Field(default=0.0, ge=0)
    total_content: int = Field(default=0, ge=0)
    # Display only; there is no follow operation
    followers_count: int = Field(default=0, ge=0)

    social_links: SocialLinks | None = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CreatorCreate(LedgerModel):
    """Request to register the calling user as a creator."""

    wallet_address: str
    display_name: str = Field(min_length=1, max_length=50)
    bio: str = Field(default="", max_length=500)
    profile_image: str | None = None
    # Omitted or null takes the configured default
    revenue_share_percentage: float = Field(
        default=None, ge=0, le=MAX_CONTENT_SHARE, validate_default=True
    )
    social_links: SocialLinks | None = None

    @field_validator("wallet_address")
    @classmethod
    def check_wallet(cls, v: str) -> str:
        return validate_wallet_address(v)

    @field_validator("revenue_share_percentage", mode="before")
    @classmethod
    def default_share(cls, v: float | None, info: ValidationInfo) -> float:
        if v is None:
            return context_setting(info, "default_revenue_share_percentage")
        return v

    @field_validator("profile_image")
    @classmethod
    def check_profile_image(cls, v: str | None) -> str | None:
        return validate_url(v) if v else v


class CreatorUpdate(LedgerModel):
    """
    Mutable creator fields.

    Identity, wallet and aggregate totals are intentionally absent: they
    cannot be changed through an update.
    """

    display_name: str | None = Field(default=None, min_length=1, max_length=50)
    bio: str | None = Field(default=None, max_length=500)
    profile_image: str | None = None
    revenue_share_percentage: float | None = Field(default=None, ge=0, le=MAX_CONTENT_SHARE)
    social_links: SocialLinks | None = None

    @field_validator("profile_image")
    @classmethod
    def check_profile_image(cls, v: str | None) -> str | None:
        return validate_url(v) if v else v
