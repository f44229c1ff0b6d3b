"""Unit tests for domain exceptions and their HTTP status mapping."""

import pytest

from fraud_review.core.errors import (
    ERROR_STATUS_MAP,
    ConflictError,
    ForbiddenError,
    FraudReviewError,
    InvalidAmountError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    get_status_code,
)


class TestFraudReviewError:
    """Test the base exception."""

    def test_message_and_details(self):
        error = FraudReviewError("Something broke", details={"key": "value"})
        assert error.message == "Something broke"
        assert error.details == {"key": "value"}
        assert str(error) == "Something broke"

    def test_details_default_to_empty_dict(self):
        assert FraudReviewError("x").details == {}

    @pytest.mark.parametrize(
        "error_class",
        [ValidationError, InvalidAmountError, NotFoundError, UnauthorizedError, ForbiddenError,
         ConflictError],
    )
    def test_subclasses(self, error_class):
        assert issubclass(error_class, FraudReviewError)


class TestGetStatusCode:
    """Test get_status_code."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ValidationError("bad"), 400),
            (InvalidAmountError("Amount must be a positive number"), 400),
            (NotFoundError("missing"), 404),
            (UnauthorizedError("Unauthorized"), 401),
            (ForbiddenError("Forbidden - Admin access required"), 403),
            (ConflictError("User with this email already exists"), 409),
        ],
    )
    def test_mapped_errors(self, error, expected):
        assert get_status_code(error) == expected

    def test_base_error_is_500(self):
        assert get_status_code(FraudReviewError("x")) == 500

    def test_unknown_exception_is_500(self):
        assert get_status_code(RuntimeError("x")) == 500

    def test_subclass_inherits_status(self):
        assert InvalidAmountError not in ERROR_STATUS_MAP
        assert get_status_code(InvalidAmountError("x")) == ERROR_STATUS_MAP[ValidationError]
