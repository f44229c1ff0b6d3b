"""
Domain-specific exceptions for the Fraud Review API.

These exceptions represent business logic violations and are mapped
to appropriate HTTP status codes in the API layer.
"""

from typing import Any


class FraudReviewError(Exception):
    """Base exception for all fraud review domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(FraudReviewError):
    """
    Raised when input data fails validation.

    Examples:
    - Required field missing
    - Business rule validation failure

    HTTP Status: 400 Bad Request
    """

    pass


class InvalidAmountError(ValidationError):
    """
    Raised when a transaction amount cannot be classified.

    Examples:
    - NaN or infinite amount
    - Zero or negative amount

    HTTP Status: 400 Bad Request
    """

    pass


class NotFoundError(FraudReviewError):
    """
    Raised when a requested resource does not exist.

    Examples:
    - Transaction ID not found
    - User not found

    HTTP Status: 404 Not Found
    """

    pass


class UnauthorizedError(FraudReviewError):
    """
    Raised when user lacks valid authentication.

    Examples:
    - Missing bearer token
    - Invalid or expired token
    - Wrong email/password combination

    HTTP Status: 401 Unauthorized
    """

    pass


class ForbiddenError(FraudReviewError):
    """
    Raised when user is authenticated but not allowed to perform action.

    Examples:
    - Non-admin calling an admin endpoint
    - Logging in with a role the account does not hold

    HTTP Status: 403 Forbidden
    """

    pass


class ConflictError(FraudReviewError):
    """
    Raised when operation conflicts with current state.

    Examples:
    - Registering an email that already exists

    HTTP Status: 409 Conflict
    """

    pass


ERROR_STATUS_MAP = {
    ValidationError: 400,
    NotFoundError: 404,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    ConflictError: 409,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Subclasses inherit the status of the nearest mapped ancestor,
    so InvalidAmountError resolves to 400 through ValidationError.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_MAP:
            return ERROR_STATUS_MAP[cls]
    return 500
