"""
Creator API Routes
"""

from fastapi import APIRouter, Depends

from creatorshare.api.dependencies import CurrentUserDep, StoreDep, validated_body
from creatorshare.api.responses import success_response
from creatorshare.exceptions import Conflict, NotFound
from creatorshare.models.base import ApiResponse
from creatorshare.models.creator import CreatorCreate, CreatorUpdate

router = APIRouter(prefix="/creators", tags=["creators"])


@router.post("", response_model=ApiResponse, status_code=201)
async def register_creator(
    user_id: CurrentUserDep,
    store: StoreDep,
    data: CreatorCreate = Depends(validated_body(CreatorCreate)),
) -> ApiResponse:
    """Register the calling user as a creator."""
    if store.get_creator_by_wallet(data.wallet_address) is not None:
        raise Conflict("Wallet already registered")

    creator = store.create_creator(user_id, data)
    if creator is None:
        raise Conflict("Creator already registered")
    return success_response(creator, "Creator registered")


@router.get("/me", response_model=ApiResponse)
async def get_me(user_id: CurrentUserDep, store: StoreDep) -> ApiResponse:
    creator = store.get_creator(user_id)
    if creator is None:
        raise NotFound("Creator not found")
    return success_response(creator)


@router.patch("/me", response_model=ApiResponse)
async def update_me(
    data: CreatorUpdate,
    user_id: CurrentUserDep,
    store: StoreDep,
) -> ApiResponse:
    creator = store.update_creator(user_id, data)
    if creator is None:
        raise NotFound("Creator not found")
    return success_response(creator, "Profile updated")


@router.get("/{creator_id}", response_model=ApiResponse)
async def get_creator(creator_id: str, store: StoreDep) -> ApiResponse:
    creator = store.get_creator(creator_id)
    if creator is None:
        raise NotFound("Creator not found")
    return success_response(creator)
