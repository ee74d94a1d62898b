"""
Notification API Routes

The caller's in-app notification inbox.
"""

from fastapi import APIRouter, Query

from creatorshare.api.dependencies import CurrentUserDep, NotificationServiceDep
from creatorshare.api.responses import success_response
from creatorshare.exceptions import NotFound
from creatorshare.models.base import ApiResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=ApiResponse)
async def list_notifications(
    user_id: CurrentUserDep,
    notifications: NotificationServiceDep,
    unread_only: bool = False,
    limit: int = Query(default=50, ge=1, le=100),
) -> ApiResponse:
    return success_response(
        {
            "notifications": notifications.get_notifications(user_id, unread_only, limit),
            "unread_count": notifications.get_unread_count(user_id),
        }
    )


@router.post("/{notification_id}/read", response_model=ApiResponse)
async def mark_read(
    notification_id: str,
    user_id: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> ApiResponse:
    if not notifications.mark_as_read(notification_id, user_id):
        raise NotFound("Notification not found")
    return success_response(message="Notification marked as read")
