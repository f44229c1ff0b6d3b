"""API routes for registration, login and the caller's profile."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fraud_review.core.database import get_session
from fraud_review.core.dependencies import CurrentUser
from fraud_review.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from fraud_review.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(session: AsyncSession = Depends(get_session)) -> AuthService:
    """Get auth service instance."""
    return AuthService(session)


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """Create a regular user account."""
    user = await auth_service.register(request)
    return {"message": "User created successfully", "user_id": user["id"]}


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """Exchange credentials for a bearer token.

    Passing a role restricts login to accounts holding that role.
    """
    return await auth_service.login(request.email, request.password, request.role)


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: CurrentUser) -> dict:
    """End the session.

    Tokens are stateless; the client discards its token.
    """
    return {"message": "Logout successful"}


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """Get the caller's account."""
    return await auth_service.get_profile(UUID(current_user.user_id))


@router.patch("/profile", response_model=MessageResponse)
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """Update the caller's profile and, optionally, password."""
    await auth_service.update_profile(UUID(current_user.user_id), request)
    return {"message": "Profile updated successfully"}
