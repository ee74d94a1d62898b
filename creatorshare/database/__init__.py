"""
CreatorShare Database Layer

The in-memory ledger store and the relationship maintainer that keeps
its derived counters consistent.
"""

from creatorshare.database.relationships import RelationshipMaintainer
from creatorshare.database.store import LedgerStore

__all__ = [
    "LedgerStore",
    "RelationshipMaintainer",
]
