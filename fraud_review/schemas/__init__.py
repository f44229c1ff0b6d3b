"""Schemas package for request/response models."""

from fraud_review.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    UserSummary,
)
from fraud_review.schemas.transaction import (
    StatusUpdateRequest,
    TransactionCreate,
    TransactionResponse,
    TransactionStats,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "UserSummary",
    "UserResponse",
    "ProfileUpdateRequest",
    "MessageResponse",
    # Transactions
    "TransactionCreate",
    "TransactionResponse",
    "StatusUpdateRequest",
    "TransactionStats",
]
