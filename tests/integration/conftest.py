"""Pytest configuration for integration tests.

These tests need a PostgreSQL database with db/schema.sql applied and
DATABASE_URL_APP pointing at it. Without it they are skipped.
"""

import os
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from fraud_review.core.database import get_session_factory, reset_engine
from fraud_review.core.security.passwords import hash_password
from fraud_review.main import create_app
from fraud_review.persistence.user_repository import UserRepository

requires_database = pytest.mark.skipif(
    "DATABASE_URL_APP" not in os.environ,
    reason="DATABASE_URL_APP is not set",
)


@pytest.fixture(autouse=True)
async def reset_database_engine():
    """Reset database engine around each test for fresh connections."""
    await reset_engine()
    yield
    await reset_engine()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=create_app()), base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin_credentials() -> dict:
    """Create an admin account directly; the API only registers regular users."""
    email = f"admin-{uuid4().hex[:12]}@example.com"
    password = "admin-pass"
    async with get_session_factory()() as session:
        await UserRepository(session).create(
            user_id=uuid4(),
            email=email,
            password_hash=hash_password(password, rounds=4),
            username="integration-admin",
            country="France",
            role="admin",
        )
        await session.commit()
    return {"email": email, "password": password, "role": "admin"}
