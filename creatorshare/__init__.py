"""
CreatorShare - Content & Revenue-Share Ledger

Creator content feed with per-piece revenue-share configuration,
remixes, paid enhancements, community polls and Farcaster frame actions.
"""

__version__ = "1.0.0"

from creatorshare.config import settings

__all__ = ["settings", "__version__"]
