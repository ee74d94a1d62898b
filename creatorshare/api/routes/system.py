"""
System API Routes
"""

from typing import Any

from fastapi import APIRouter

from creatorshare import __version__
from creatorshare.api.dependencies import SettingsDep, StoreDep

router = APIRouter(tags=["system"])


@router.get("/health")
async def health(settings: SettingsDep, store: StoreDep) -> dict[str, Any]:
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": __version__,
        "environment": settings.app_env,
        "timestamp": store.now().isoformat(),
    }
