"""
Revenue API Routes
"""

from fastapi import APIRouter

from creatorshare.api.dependencies import AnalyticsDep
from creatorshare.api.responses import success_response
from creatorshare.models.base import ApiResponse

router = APIRouter(prefix="/revenue", tags=["revenue"])


@router.get("/stats", response_model=ApiResponse)
async def get_revenue_stats(analytics: AnalyticsDep) -> ApiResponse:
    return success_response(analytics.get_revenue_stats())
