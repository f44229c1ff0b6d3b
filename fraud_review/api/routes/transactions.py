"""API routes for submitting and reviewing transactions."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fraud_review.core.database import get_session
from fraud_review.core.dependencies import CurrentUser, RequireAdmin
from fraud_review.schemas.auth import MessageResponse
from fraud_review.schemas.transaction import (
    StatusUpdateRequest,
    TransactionCreate,
    TransactionResponse,
    TransactionStats,
)
from fraud_review.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


def get_transaction_service(session: AsyncSession = Depends(get_session)) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(session)


@router.get("", response_model=list[TransactionResponse])
async def list_my_transactions(
    current_user: CurrentUser,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> list[dict]:
    """List the caller's transactions, newest first."""
    return await transaction_service.list_for_user(UUID(current_user.user_id))


@router.get("/all", response_model=list[TransactionResponse])
async def list_all_transactions(
    current_user: RequireAdmin,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> list[dict]:
    """List every transaction (admin only)."""
    return await transaction_service.list_all()


@router.get("/stats", response_model=TransactionStats)
async def transaction_stats(
    current_user: RequireAdmin,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> dict:
    """Dashboard totals: count, approved amount, flagged and pending counts (admin only)."""
    return await transaction_service.get_stats()


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    request: TransactionCreate,
    current_user: CurrentUser,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> dict:
    """Submit a transaction.

    Its status (pending or flagged) is assigned by the fraud classifier.
    """
    return await transaction_service.create_transaction(UUID(current_user.user_id), request)


@router.patch("/{transaction_id}/status", response_model=TransactionResponse)
async def update_transaction_status(
    transaction_id: UUID,
    request: StatusUpdateRequest,
    current_user: RequireAdmin,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> dict:
    """Approve, flag or reset a transaction (admin only)."""
    return await transaction_service.update_status(transaction_id, request.status)


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: UUID,
    current_user: RequireAdmin,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> dict:
    """Delete a transaction (admin only)."""
    await transaction_service.delete_transaction(transaction_id)
    return {"message": "Transaction deleted successfully"}
