"""
Ledger API Routes

Append-only engagement and transaction records.
"""

from fastapi import APIRouter, Depends, Query

from creatorshare.api.dependencies import (
    CurrentUserDep,
    NotificationServiceDep,
    StoreDep,
    get_current_user,
)
from creatorshare.api.responses import success_response
from creatorshare.exceptions import NotFound
from creatorshare.models.base import ApiResponse
from creatorshare.models.ledger import EngagementCreate, TransactionCreate, TransactionStatus

router = APIRouter(tags=["ledger"])


@router.post("/engagements", response_model=ApiResponse, status_code=201)
async def record_engagement(
    data: EngagementCreate,
    user_id: CurrentUserDep,
    store: StoreDep,
) -> ApiResponse:
    engagement = store.create_engagement(data, user_id=user_id)
    return success_response(engagement, "Engagement recorded")


@router.post(
    "/transactions",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[Depends(get_current_user)],
)
async def record_transaction(
    data: TransactionCreate,
    store: StoreDep,
    notifications: NotificationServiceDep,
) -> ApiResponse:
    """Record a transfer. Completed transfers credit the content and the receiving creator."""
    transaction = store.create_transaction(data)
    if transaction.status == TransactionStatus.COMPLETED:
        notifications.revenue_received(transaction)
    return success_response(transaction, "Transaction recorded")


@router.get("/transactions", response_model=ApiResponse)
async def list_transactions(
    store: StoreDep,
    content_id: str | None = None,
    wallet: str | None = Query(default=None, max_length=42),
) -> ApiResponse:
    if content_id:
        transactions = store.get_transactions_by_content(content_id)
    elif wallet:
        transactions = store.get_transactions_by_wallet(wallet)
    else:
        transactions = store.list_transactions()
    transactions.sort(key=lambda t: t.timestamp, reverse=True)
    return success_response(transactions)


@router.get("/transactions/{transaction_id}", response_model=ApiResponse)
async def get_transaction(transaction_id: str, store: StoreDep) -> ApiResponse:
    transaction = store.get_transaction(transaction_id)
    if transaction is None:
        raise NotFound("Transaction not found")
    return success_response(transaction)
