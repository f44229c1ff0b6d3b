"""Account service: registration, login and profile management."""

import logging
from typing import Any
from uuid import UUID, uuid4

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fraud_review.core.auth import create_access_token
from fraud_review.core.config import Settings, get_settings
from fraud_review.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from fraud_review.core.security.passwords import hash_password, verify_password
from fraud_review.domain.models.transaction import UserRole
from fraud_review.persistence.user_repository import UserRepository
from fraud_review.schemas.auth import ProfileUpdateRequest, RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MSG = "Invalid credentials"
DUPLICATE_EMAIL_MSG = "User with this email already exists"

_PROFILE_FIELDS = ("username", "full_name", "country", "phone_number")


def _public_user(user: dict[str, Any]) -> dict[str, Any]:
    """Drop the password hash from a user row."""
    return {key: value for key, value in user.items() if key != "password"}


class AuthService:
    """Service for user account operations."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = UserRepository(session)

    async def register(self, data: RegisterRequest) -> dict:
        """Create a regular user account. The role is always 'user'."""
        existing = await self.repo.get_by_email(data.email)
        if existing:
            raise ConflictError(DUPLICATE_EMAIL_MSG, details={"email": data.email})

        password_hash = await run_in_threadpool(
            hash_password, data.password, rounds=self.settings.security.bcrypt_rounds
        )
        try:
            user = await self.repo.create(
                user_id=uuid4(),
                email=data.email,
                password_hash=password_hash,
                username=data.username,
                country=data.country,
                full_name=data.full_name,
                phone_number=data.phone_number,
                role=UserRole.USER.value,
            )
        except IntegrityError as e:
            # concurrent registration won the users.email unique constraint
            raise ConflictError(DUPLICATE_EMAIL_MSG, details={"email": data.email}) from e

        logger.info("User registered", extra={"user_id": str(user["id"])})
        return _public_user(user)

    async def login(self, email: str, password: str, role: UserRole | None = None) -> dict:
        """Check credentials and issue an access token.

        Raises:
            UnauthorizedError: Unknown email or wrong password.
            ForbiddenError: A role was requested that the account does not hold.
        """
        user = await self.repo.get_by_email(email)
        if not user or not await run_in_threadpool(verify_password, password, user["password"]):
            logger.warning("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS_MSG)

        if role is not None and user["role"] != UserRole(role).value:
            raise ForbiddenError(f"You don't have {UserRole(role).value} access")

        token = create_access_token(
            user_id=str(user["id"]),
            email=user["email"],
            role=user["role"],
            settings=self.settings,
        )
        logger.info("User logged in", extra={"user_id": str(user["id"]), "role": user["role"]})
        return {
            "message": "Login successful",
            "access_token": token,
            "token_type": "bearer",
            "user": {
                "id": user["id"],
                "email": user["email"],
                "username": user["username"],
                "role": user["role"],
            },
        }

    async def get_profile(self, user_id: UUID) -> dict:
        """Get a user without the password hash."""
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", details={"user_id": str(user_id)})
        return _public_user(user)

    async def update_profile(self, user_id: UUID, data: ProfileUpdateRequest) -> dict:
        """Update profile fields and optionally the password.

        Only non-empty fields are written. A password change verifies the
        current password first.
        """
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", details={"user_id": str(user_id)})

        if data.current_password and data.new_password:
            if not await run_in_threadpool(
                verify_password, data.current_password, user["password"]
            ):
                raise UnauthorizedError("Current password is incorrect")
            password_hash = await run_in_threadpool(
                hash_password, data.new_password, rounds=self.settings.security.bcrypt_rounds
            )
            await self.repo.update(user_id, password=password_hash)
            logger.info("Password changed", extra={"user_id": str(user_id)})

        changes = {
            field: getattr(data, field) for field in _PROFILE_FIELDS if getattr(data, field)
        }
        if changes:
            user = await self.repo.update(user_id, **changes)

        return _public_user(user)
