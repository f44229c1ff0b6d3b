"""
FastAPI dependency injection utilities.

Provides reusable dependencies for authentication and role checks. Each
dependency resolves the caller for the current request only.
"""

from typing import Annotated

from fastapi import Depends

from fraud_review.core.auth import AuthenticatedUser, get_current_user, require_role
from fraud_review.domain.models.transaction import UserRole


def get_current_user_dep(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
    """
    Re-export of get_current_user from the auth module.

    Use this dependency for endpoints that require authentication
    but no specific role.

    Usage:
        @router.get("/me")
        async def me(user: CurrentUser):
            return {"user_id": user.user_id}
    """
    return user


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user_dep)]


def require_admin(
    user: AuthenticatedUser = Depends(require_role(UserRole.ADMIN)),
) -> AuthenticatedUser:
    """
    Dependency that enforces the admin role.

    Returns:
        AuthenticatedUser if user is an administrator

    Raises:
        ForbiddenError: If user is not an administrator
    """
    return user


RequireAdmin = Annotated[AuthenticatedUser, Depends(require_admin)]
