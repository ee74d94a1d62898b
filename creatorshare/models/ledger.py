"""
Ledger Models

Append-only transaction and engagement records, and the aggregate
views computed from them.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from creatorshare.models.base import (
    LedgerModel,
    utc_now,
    validate_dict_security,
    validate_wallet_address,
)


class TransactionType(str, Enum):
    REVENUE_SHARE = "revenue_share"
    ENHANCEMENT_PURCHASE = "enhancement_purchase"
    REMIX_PAYMENT = "remix_payment"
    PLATFORM_FEE = "platform_fee"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class EngagementType(str, Enum):
    LIKE = "like"
    COMMENT = "comment"
    SHARE = "share"
    REMIX = "remix"
    ENHANCE = "enhance"


# ═══════════════════════════════════════════════════════════════
# TRANSACTIONS
# ═══════════════════════════════════════════════════════════════


class Transaction(LedgerModel):
    """A value transfer associated with a content piece. Never updated once written."""

    transaction_id: str
    from_wallet: str
    to_wallet: str
    amount: float = Field(ge=0)
    transaction_type: TransactionType
    content_id: str
    status: TransactionStatus = TransactionStatus.PENDING
    transaction_hash: str | None = None
    gas_used: int | None = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=utc_now)


class TransactionCreate(LedgerModel):
    from_wallet: str
    to_wallet: str
    amount: float = Field(ge=0)
    transaction_type: TransactionType
    content_id: str = Field(min_length=1)
    status: TransactionStatus = TransactionStatus.PENDING
    transaction_hash: str | None = Field(default=None, max_length=66)
    gas_used: int | None = Field(default=None, ge=0)

    @field_validator("from_wallet", "to_wallet")
    @classmethod
    def check_wallet(cls, v: str) -> str:
        return validate_wallet_address(v)


# ═══════════════════════════════════════════════════════════════
# ENGAGEMENTS
# ═══════════════════════════════════════════════════════════════


class Engagement(LedgerModel):
    engagement_id: str
    content_id: str
    user_id: str
    engagement_type: EngagementType
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)


class EngagementCreate(LedgerModel):
    content_id: str = Field(min_length=1)
    engagement_type: EngagementType
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata")
    @classmethod
    def check_metadata(cls, v: dict[str, Any]) -> dict[str, Any]:
        return validate_dict_security(v)


# ═══════════════════════════════════════════════════════════════
# AGGREGATES
# ═══════════════════════════════════════════════════════════════


class ContentAnalytics(LedgerModel):
    """Per-content activity summary."""

    content_id: str
    views: int = 0
    engagement: int = 0
    revenue: float = 0.0
    remixes: int = 0
    enhancements: int = 0


class RevenueStats(LedgerModel):
    """Platform-wide revenue summary."""

    total_revenue: float = 0.0
    monthly_growth: float = Field(default=0.0, description="Percent change vs previous 30 days")
    active_creators: int = 0
    total_shares: int = 0
    pending_distributions: int = 0
    total_transactions: int = 0
    generated_at: datetime = Field(default_factory=utc_now)
