"""
Farcaster Frame Models

Frame webhook payloads arrive in Farcaster's camelCase wire format;
fields are aliased so the rest of the code reads snake_case.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import Field

from creatorshare.models.base import LedgerModel


class FrameButton(IntEnum):
    """Frame button index -> ledger action."""

    CONFIGURE_REVENUE = 1
    CREATE_REMIX = 2
    PURCHASE_ENHANCEMENT = 3
    VOTE_POLL = 4


class FrameAction(str, Enum):
    CONFIGURE_REVENUE = "configure_revenue"
    CREATE_REMIX = "create_remix"
    PURCHASE_ENHANCEMENT = "purchase_enhancement"
    VOTE_POLL = "vote_poll"


BUTTON_ACTIONS: dict[int, FrameAction] = {
    FrameButton.CONFIGURE_REVENUE: FrameAction.CONFIGURE_REVENUE,
    FrameButton.CREATE_REMIX: FrameAction.CREATE_REMIX,
    FrameButton.PURCHASE_ENHANCEMENT: FrameAction.PURCHASE_ENHANCEMENT,
    FrameButton.VOTE_POLL: FrameAction.VOTE_POLL,
}


class FrameUntrustedData(LedgerModel):
    fid: int = 0
    url: str = ""
    message_hash: str = Field(default="", alias="messageHash")
    timestamp: int = Field(default=0, description="Unix seconds")
    network: int = 0
    button_index: int = Field(default=0, alias="buttonIndex")
    input_text: str | None = Field(default=None, alias="inputText", max_length=1000)
    state: str | None = Field(default=None, max_length=4096)


class FrameTrustedData(LedgerModel):
    message_bytes: str = Field(default="", alias="messageBytes")


class FrameWebhookPayload(LedgerModel):
    untrusted_data: FrameUntrustedData = Field(alias="untrustedData")
    trusted_data: FrameTrustedData = Field(
        default_factory=FrameTrustedData, alias="trustedData"
    )


class FrameActionResult(LedgerModel):
    action: FrameAction
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
