"""Transaction request/response schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from fraud_review.domain.models.transaction import TransactionStatus


class TransactionCreate(BaseModel):
    """Schema for submitting a transaction.

    Status is never accepted from the client; it is assigned by the
    fraud classifier.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=10,
        decimal_places=2,
        allow_inf_nan=False,
        description="Positive amount with at most two decimal places",
    )
    location: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description='Free-text location, country last (e.g. "New York, USA")',
    )
    description: str | None = None


class TransactionResponse(BaseModel):
    id: UUID
    user_id: UUID
    amount: Decimal
    location: str
    description: str | None = None
    status: TransactionStatus
    timestamp: datetime | None = None
    created_at: datetime | None = None


class StatusUpdateRequest(BaseModel):
    """Administrator override of a transaction's status."""

    status: TransactionStatus


class TransactionStats(BaseModel):
    """Admin dashboard figures."""

    total_transactions: int
    approved_amount: Decimal
    flagged_count: int
    pending_count: int
    approved_count: int
