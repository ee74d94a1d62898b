"""
Community Poll API Routes
"""

from fastapi import APIRouter

from creatorshare.api.dependencies import CurrentUserDep, PollEngineDep, StoreDep
from creatorshare.api.responses import success_response
from creatorshare.exceptions import ApiError, NotFound
from creatorshare.models.base import ApiResponse
from creatorshare.models.poll import PollCreate, VoteRequest

router = APIRouter(prefix="/polls", tags=["polls"])


@router.post("", response_model=ApiResponse, status_code=201)
async def create_poll(data: PollCreate, user_id: CurrentUserDep, store: StoreDep) -> ApiResponse:
    poll = store.create_poll(data, creator_id=user_id)
    return success_response(poll, "Poll created")


@router.get("", response_model=ApiResponse)
async def list_polls(store: StoreDep, creator_id: str | None = None) -> ApiResponse:
    polls = store.get_polls_by_creator(creator_id) if creator_id else store.list_polls()
    polls.sort(key=lambda p: p.created_at, reverse=True)
    return success_response(polls)


@router.get("/{poll_id}", response_model=ApiResponse)
async def get_poll(poll_id: str, polls: PollEngineDep) -> ApiResponse:
    """Poll question, options and current per-option counts."""
    tally = polls.tally(poll_id)
    if tally is None:
        raise NotFound("Poll not found")
    return success_response(tally)


@router.post("/{poll_id}/vote", response_model=ApiResponse)
async def vote(
    poll_id: str,
    data: VoteRequest,
    user_id: CurrentUserDep,
    polls: PollEngineDep,
) -> ApiResponse:
    """
    Cast the caller's vote.

    Rejected (400) for a closed or expired poll, a repeat vote or an
    option index outside the poll's options.
    """
    if not polls.vote_on_poll(poll_id, user_id, data.option_index):
        if polls.tally(poll_id) is None:
            raise NotFound("Poll not found")
        raise ApiError(400, "Failed to vote on poll")
    return success_response(polls.tally(poll_id), "Vote recorded successfully")
