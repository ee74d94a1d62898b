"""
Farcaster Frame API Routes

Webhook target for frame button presses.
"""

from fastapi import APIRouter, Response

from creatorshare.api.dependencies import FrameDispatcherDep
from creatorshare.api.responses import success_response
from creatorshare.models.base import ApiResponse
from creatorshare.models.frame import FrameWebhookPayload

router = APIRouter(prefix="/frame", tags=["frame"])

# Frames are posted cross-origin by Farcaster clients
FRAME_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, x-user-id",
}


@router.post("", response_model=ApiResponse)
async def handle_frame_action(
    payload: FrameWebhookPayload,
    dispatcher: FrameDispatcherDep,
) -> ApiResponse:
    result = dispatcher.dispatch(payload)
    return success_response({"action": result.action, **result.data}, result.message)


@router.options("")
async def frame_options() -> Response:
    return Response(status_code=200, headers=FRAME_CORS_HEADERS)
