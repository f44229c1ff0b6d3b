"""
Access token issuing/verification and authentication dependencies.

Login issues a signed HS256 JWT carrying the user id and role. Every request
resolves its own AuthenticatedUser from the bearer token; no role or session
state lives outside the request.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from fraud_review.core.config import Settings, get_settings
from fraud_review.core.errors import ForbiddenError, UnauthorizedError
from fraud_review.domain.models.transaction import UserRole

logger = logging.getLogger(__name__)

INVALID_OR_EXPIRED_TOKEN_MSG = "Invalid or expired token"
UNAUTHORIZED_MSG = "Unauthorized"
ADMIN_REQUIRED_MSG = "Forbidden - Admin access required"

# Authorization header is optional so a missing token maps to our 401, not FastAPI's 403
_optional_security = HTTPBearer(auto_error=False)


class TokenPayload(BaseModel):
    """Access token claims."""

    sub: str
    email: str | None = None
    role: UserRole = UserRole.USER
    exp: int


class AuthenticatedUser(BaseModel):
    """Authenticated caller resolved for a single request."""

    user_id: str
    email: str | None = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        """Check if user has the admin role."""
        return self.role == UserRole.ADMIN

    def has_role(self, role: UserRole | str) -> bool:
        """Check if user has a specific role."""
        return self.role == UserRole(role)


def create_access_token(
    user_id: str,
    email: str | None,
    role: UserRole | str,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> str:
    """Sign an access token for a logged-in user."""
    settings = settings or get_settings()
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(minutes=settings.security.token_ttl_minutes)

    claims = {
        "sub": str(user_id),
        "email": email,
        "role": UserRole(role).value,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(claims, settings.signing_key, algorithm=settings.security.token_algorithm)


def verify_token(token: str, settings: Settings | None = None) -> TokenPayload:
    """Verify an access token's signature and expiry and return its claims."""
    settings = settings or get_settings()

    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.signing_key,
            algorithms=[settings.security.token_algorithm],
        )
    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None

    try:
        return TokenPayload(**payload)
    except ValueError as e:
        logger.warning(f"Invalid token claims: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_optional_security),
) -> AuthenticatedUser:
    """Resolve the caller from the bearer token.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid.
    """
    if credentials is None:
        logger.warning("Missing Authorization header")
        raise UnauthorizedError(UNAUTHORIZED_MSG)

    payload = verify_token(credentials.credentials)

    return AuthenticatedUser(
        user_id=payload.sub,
        email=payload.email,
        role=payload.role,
    )


def require_role(required_role: UserRole):
    """Dependency factory that enforces a specific role.

    Usage:
        @router.delete("/transactions/{id}")
        async def delete_transaction(
            id: UUID,
            user: AuthenticatedUser = Depends(require_role(UserRole.ADMIN)),
        ):
            ...
    """

    def role_checker(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
        if not user.has_role(required_role):
            logger.warning(
                "Access denied - user %s lacks required role: %s. User role: %s",
                user.user_id,
                required_role.value,
                user.role.value,
            )
            raise ForbiddenError(
                ADMIN_REQUIRED_MSG if required_role == UserRole.ADMIN else "Forbidden",
                details={"required_role": required_role.value},
            )

        logger.debug("Role check passed: user has %s role", required_role.value)
        return user

    return role_checker
