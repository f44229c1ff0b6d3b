"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

# Set test environment variables before importing the app.
# Unit tests use mocks, so these are just defaults.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SECURITY_SESSION_SECRET", "test-signing-secret")
os.environ.setdefault("SECURITY_BCRYPT_ROUNDS", "4")
os.environ.setdefault("OTEL_LOG_RECORD_FORMAT", "console")

from fraud_review.core.auth import AuthenticatedUser  # noqa: E402
from fraud_review.core.security.passwords import hash_password  # noqa: E402
from fraud_review.domain.models.transaction import UserRole  # noqa: E402

USER_ID = UUID("7f1d2a4e-3c5b-4e8f-9a10-112233445566")
ADMIN_ID = UUID("0a9b8c7d-6e5f-4a3b-8c2d-aabbccddeeff")
TRANSACTION_ID = UUID("c3d4e5f6-a7b8-4c9d-8e0f-123456789abc")

USER_PASSWORD = "hunter22"
NOW = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


def make_user_row(
    user_id: UUID = USER_ID,
    email: str = "alice@example.com",
    role: str = "user",
    country: str = "France",
    password: str = USER_PASSWORD,
) -> dict:
    """Build a user row as returned by UserRepository."""
    return {
        "id": user_id,
        "email": email,
        "password": hash_password(password, rounds=4),
        "username": email.split("@")[0],
        "full_name": None,
        "country": country,
        "phone_number": None,
        "role": role,
        "created_at": NOW,
        "updated_at": NOW,
    }


def make_transaction_row(
    transaction_id: UUID = TRANSACTION_ID,
    user_id: UUID = USER_ID,
    amount: Decimal = Decimal("42.50"),
    location: str = "Paris, France",
    status: str = "pending",
    timestamp: datetime = NOW,
) -> dict:
    """Build a transaction row as returned by TransactionRepository."""
    return {
        "id": transaction_id,
        "user_id": user_id,
        "amount": amount,
        "location": location,
        "description": None,
        "status": status,
        "timestamp": timestamp,
        "created_at": timestamp,
    }


@pytest.fixture
def mock_session():
    """Mock async database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def mock_result():
    """Factory for a mock SQLAlchemy result."""

    def _make(rows=None, rowcount: int = 1):
        result = MagicMock()
        rows = rows or []
        result.fetchone.return_value = rows[0] if rows else None
        result.fetchall.return_value = rows
        result.rowcount = rowcount
        return result

    return _make


@pytest.fixture
def user_row() -> dict:
    return make_user_row()


@pytest.fixture
def admin_row() -> dict:
    return make_user_row(user_id=ADMIN_ID, email="admin@example.com", role="admin")


@pytest.fixture
def transaction_row() -> dict:
    return make_transaction_row()


# =============================================================================
# Authenticated callers
# =============================================================================


@pytest.fixture
def regular_user() -> AuthenticatedUser:
    """Caller holding the user role."""
    return AuthenticatedUser(user_id=str(USER_ID), email="alice@example.com", role=UserRole.USER)


@pytest.fixture
def admin_user() -> AuthenticatedUser:
    """Caller holding the admin role."""
    return AuthenticatedUser(user_id=str(ADMIN_ID), email="admin@example.com", role=UserRole.ADMIN)
