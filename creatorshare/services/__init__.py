"""
CreatorShare Services

Business logic layered over the ledger store.
"""

from creatorshare.services.analytics import AnalyticsService
from creatorshare.services.frames import FrameActionDispatcher
from creatorshare.services.notifications import NotificationService
from creatorshare.services.polls import PollVotingEngine
from creatorshare.services.search import ContentQuery, Page, paginate, query_content, search_content

__all__ = [
    "AnalyticsService",
    "ContentQuery",
    "FrameActionDispatcher",
    "NotificationService",
    "Page",
    "PollVotingEngine",
    "paginate",
    "query_content",
    "search_content",
]
