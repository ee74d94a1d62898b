"""
CreatorShare API Routes
"""

from creatorshare.api.routes import (
    content,
    creators,
    frame,
    ledger,
    notifications,
    polls,
    remixes,
    revenue,
    system,
)

__all__ = [
    "content",
    "creators",
    "frame",
    "ledger",
    "notifications",
    "polls",
    "remixes",
    "revenue",
    "system",
]
