"""
Content API Routes

Content feed, search, creation and revenue-share configuration.
"""

import structlog
from fastapi import APIRouter, Depends, Query

from creatorshare.api.dependencies import (
    AnalyticsDep,
    CurrentUserDep,
    SettingsDep,
    StoreDep,
    rate_limit,
    validated_body,
)
from creatorshare.api.responses import paginated_response, success_response
from creatorshare.exceptions import NotFound, PermissionDenied
from creatorshare.models.base import ApiResponse, PaginatedApiResponse
from creatorshare.models.content import ContentCreate, ContentStatus, RevenueShareUpdate
from creatorshare.monitoring import log_duration
from creatorshare.services.search import ContentQuery, query_content

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/content", tags=["content"])

HOUR = 3600


def parse_tags(tags: str | None) -> list[str] | None:
    """Comma-separated tag list; empty entries dropped."""
    if not tags:
        return None
    parsed = [tag.strip() for tag in tags.split(",") if tag.strip()]
    return parsed or None


@router.get(
    "",
    response_model=PaginatedApiResponse,
    dependencies=[Depends(rate_limit("content_feed", key="ip"))],
)
async def get_content_feed(
    store: StoreDep,
    settings: SettingsDep,
    q: str | None = Query(default=None, max_length=200),
    category: str | None = Query(default=None, max_length=50),
    tags: str | None = Query(default=None, description="Comma-separated tags"),
    creator_id: str | None = None,
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
) -> PaginatedApiResponse:
    """Newest-first content feed. A creator filter takes precedence over search."""
    query = ContentQuery(
        creator_id=creator_id,
        query=q or "",
        category=category,
        tags=parse_tags(tags),
        page=page,
        limit=limit if limit is not None else settings.default_page_limit,
    )
    with log_duration(logger, "content_query", page=query.page, filtered=query.has_filters):
        result = query_content(store, query, settings.max_page_limit)
    return paginated_response(result)


@router.post(
    "",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[
        Depends(rate_limit("create_content", "content_creation_limit_per_hour", HOUR))
    ],
)
async def create_content(
    user_id: CurrentUserDep,
    store: StoreDep,
    data: ContentCreate = Depends(validated_body(ContentCreate)),
) -> ApiResponse:
    content = store.create_content(
        data,
        creator_id=user_id,
        status=ContentStatus.PUBLISHED,
        is_remix=False,
    )
    return success_response(content, "Content created successfully")


@router.get("/{content_id}", response_model=ApiResponse)
async def get_content(content_id: str, store: StoreDep) -> ApiResponse:
    content = store.get_content(content_id)
    if content is None:
        raise NotFound("Content not found")
    return success_response(content)


@router.patch(
    "/{content_id}/revenue-share",
    response_model=ApiResponse,
    dependencies=[
        Depends(rate_limit("revenue_share", "revenue_share_update_limit_per_hour", HOUR))
    ],
)
async def update_revenue_share(
    content_id: str,
    data: RevenueShareUpdate,
    user_id: CurrentUserDep,
    store: StoreDep,
) -> ApiResponse:
    """Change a piece's revenue-share percentage. Only its creator may do so."""
    content = store.get_content(content_id)
    if content is None:
        raise NotFound("Content not found")
    if content.creator_id != user_id:
        logger.warning(
            "revenue_share_update_denied",
            content_id=content_id,
            user_id=user_id,
        )
        raise PermissionDenied("Only the creator can change the revenue share")

    updated = store.update_content(
        content_id,
        {"revenue_share_percentage": data.revenue_share_percentage},
    )
    if updated is None:
        raise NotFound("Content not found")
    return success_response(updated, "Revenue share updated")


@router.get("/{content_id}/analytics", response_model=ApiResponse)
async def get_content_analytics(content_id: str, analytics: AnalyticsDep) -> ApiResponse:
    result = analytics.get_content_analytics(content_id)
    if result is None:
        raise NotFound("Content not found")
    return success_response(result)


@router.get("/{content_id}/remixes", response_model=ApiResponse)
async def get_content_remixes(content_id: str, store: StoreDep) -> ApiResponse:
    if store.get_content(content_id) is None:
        raise NotFound("Content not found")
    return success_response(store.get_remixes_by_content(content_id))


@router.get("/{content_id}/enhancements", response_model=ApiResponse)
async def get_content_enhancements(content_id: str, store: StoreDep) -> ApiResponse:
    if store.get_content(content_id) is None:
        raise NotFound("Content not found")
    return success_response(store.get_enhancements_by_content(content_id))
