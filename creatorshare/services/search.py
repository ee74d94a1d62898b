"""
Content Query & Search

Filtering, substring search and pagination over the live content set.

There is no index: every search is a full scan of a store snapshot,
which is adequate for an in-memory ledger.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from creatorshare.config import settings
from creatorshare.models.content import ContentPiece

if TYPE_CHECKING:
    from creatorshare.database.store import LedgerStore

logger = structlog.get_logger(__name__)


@dataclass
class ContentQuery:
    """Feed query parameters."""

    creator_id: str | None = None
    query: str = ""
    category: str | None = None
    tags: list[str] | None = None
    page: int = 1
    limit: int = 20

    @property
    def has_filters(self) -> bool:
        return bool(self.query or self.category or self.tags)


@dataclass
class Page:
    """One page of a sorted result set."""

    items: list[ContentPiece] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


def search_content(
    items: Iterable[ContentPiece],
    query: str = "",
    category: str | None = None,
    tags: Sequence[str] | None = None,
) -> list[ContentPiece]:
    """
    Filter content pieces.

    - ``query``: case-insensitive substring of the title, the description
      or any tag. Ignored when empty.
    - ``category``: exact match.
    - ``tags``: the piece carries at least one of them (exact match).

    Filters combine with AND. With no filters every item is returned.
    """
    results = list(items)

    if query:
        needle = query.lower()
        results = [
            c
            for c in results
            if needle in c.title.lower()
            or needle in c.description.lower()
            or any(needle in tag.lower() for tag in c.tags)
        ]

    if category:
        results = [c for c in results if c.category == category]

    if tags:
        wanted = set(tags)
        results = [c for c in results if wanted.intersection(c.tags)]

    return results


def paginate(
    items: Iterable[ContentPiece],
    page: int = 1,
    limit: int = 20,
    max_limit: int = 50,
) -> Page:
    """
    Sort newest first and slice out one page.

    ``limit`` is clamped to ``[1, max_limit]`` and ``page`` to at least 1.
    The sort is stable, so pieces with equal timestamps keep their input
    order. A page past the end is empty but still reports the totals.
    """
    limit = max(1, min(limit, max_limit))
    page = max(1, page)

    ordered = sorted(items, key=lambda c: c.creation_timestamp, reverse=True)
    total = len(ordered)
    start = (page - 1) * limit

    return Page(
        items=ordered[start : start + limit],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


def query_content(
    store: LedgerStore,
    query: ContentQuery,
    max_limit: int | None = None,
) -> Page:
    """
    Run a feed query against the store.

    A creator filter takes precedence: when set, the creator's pieces are
    returned and the search filters are not applied.
    """
    if max_limit is None:
        max_limit = settings.max_page_limit

    if query.creator_id:
        items = store.get_content_by_creator(query.creator_id)
    elif query.has_filters:
        items = search_content(store.list_content(), query.query, query.category, query.tags)
    else:
        items = store.list_content()

    page = paginate(items, query.page, query.limit, max_limit)
    logger.debug(
        "content_query",
        creator_id=query.creator_id,
        has_filters=query.has_filters,
        total=page.total,
        page=page.page,
    )
    return page
