"""Heuristic fraud classification for newly submitted transactions.

Rules are evaluated in a fixed priority order and the first rule that
fires decides the outcome:

1. HIGH_VALUE: amount strictly above the high-value threshold.
2. LOCATION_VELOCITY: a prior transaction inside the velocity window whose
   location differs (case-insensitive, whole string) from the new one.
3. FOREIGN_COUNTRY: the location's country differs from the user's
   declared home country, after alias normalization.

A transaction no rule fires on is PENDING. APPROVED is never produced here;
it is assigned only by an administrator.

Usage:
    status = classify(Decimal("120.00"), "London, UK", "UK", history)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from fraud_review.core.errors import InvalidAmountError
from fraud_review.domain.countries import normalize_country, parse_location_country, same_country
from fraud_review.domain.models.transaction import TransactionStatus

DEFAULT_HIGH_VALUE_THRESHOLD = Decimal("5000")
DEFAULT_VELOCITY_WINDOW = timedelta(minutes=60)


class FraudRule(str, Enum):
    HIGH_VALUE = "HIGH_VALUE"
    LOCATION_VELOCITY = "LOCATION_VELOCITY"
    FOREIGN_COUNTRY = "FOREIGN_COUNTRY"


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one transaction."""

    status: TransactionStatus
    rule: FraudRule | None = None
    reason: str | None = None

    @property
    def flagged(self) -> bool:
        return self.status == TransactionStatus.FLAGGED


@dataclass(frozen=True)
class _Candidate:
    amount: Decimal
    location: str
    user_country: str
    history: tuple[Any, ...]
    now: datetime


def _field(txn: Any, name: str) -> Any:
    if isinstance(txn, Mapping):
        return txn.get(name)
    return getattr(txn, name, None)


def _as_utc(value: datetime | str | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    # naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_amount(amount: Decimal | float | int) -> Decimal:
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(
            "Amount must be a positive number", details={"amount": str(amount)}
        ) from None

    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(
            "Amount must be a positive number", details={"amount": str(amount)}
        )
    return value


class FraudClassifier:
    """Assigns the initial review status of a transaction.

    Stateless and free of I/O; the caller supplies the user's previously
    persisted transactions. Safe to share between concurrent requests.

    Attributes:
        high_value_threshold: Amounts strictly above this are flagged.
        velocity_window: Trailing window for the location-change rule.
    """

    def __init__(
        self,
        high_value_threshold: Decimal | float | int = DEFAULT_HIGH_VALUE_THRESHOLD,
        velocity_window: timedelta = DEFAULT_VELOCITY_WINDOW,
    ):
        self.high_value_threshold = Decimal(str(high_value_threshold))
        self.velocity_window = velocity_window
        self._rules: tuple[Callable[[_Candidate], ClassificationResult | None], ...] = (
            self._check_high_value,
            self._check_location_velocity,
            self._check_foreign_country,
        )

    def evaluate(
        self,
        amount: Decimal | float | int,
        location: str,
        user_country: str | None,
        recent_transactions: Iterable[Any] = (),
        now: datetime | None = None,
    ) -> ClassificationResult:
        """Run the rules in priority order and report which one fired.

        Args:
            amount: Transaction amount in currency units.
            location: Free-text location, country as the last comma segment.
            user_country: The user's declared home country, may be empty.
            recent_transactions: Prior transactions exposing `location` and
                `timestamp`, as mappings or objects, in any order.
            now: Reference time for the velocity window. Defaults to now (UTC).

        Returns:
            ClassificationResult with status PENDING or FLAGGED.

        Raises:
            InvalidAmountError: If amount is NaN, infinite, or not positive.
        """
        candidate = _Candidate(
            amount=_to_amount(amount),
            location=location,
            user_country=user_country or "",
            history=tuple(recent_transactions),
            now=_as_utc(now) or datetime.now(UTC),
        )

        for rule in self._rules:
            result = rule(candidate)
            if result is not None:
                return result

        return ClassificationResult(status=TransactionStatus.PENDING)

    def classify(
        self,
        amount: Decimal | float | int,
        location: str,
        user_country: str | None,
        recent_transactions: Iterable[Any] = (),
        now: datetime | None = None,
    ) -> TransactionStatus:
        """Return only the status from evaluate()."""
        return self.evaluate(amount, location, user_country, recent_transactions, now).status

    def _check_high_value(self, candidate: _Candidate) -> ClassificationResult | None:
        if candidate.amount > self.high_value_threshold:
            return ClassificationResult(
                status=TransactionStatus.FLAGGED,
                rule=FraudRule.HIGH_VALUE,
                reason=f"Amount {candidate.amount} exceeds {self.high_value_threshold}",
            )
        return None

    def _check_location_velocity(self, candidate: _Candidate) -> ClassificationResult | None:
        window_start = candidate.now - self.velocity_window
        location = candidate.location.lower()

        for txn in candidate.history:
            timestamp = _as_utc(_field(txn, "timestamp"))
            if timestamp is None or timestamp < window_start:
                continue
            previous_location = _field(txn, "location") or ""
            if previous_location.lower() != location:
                return ClassificationResult(
                    status=TransactionStatus.FLAGGED,
                    rule=FraudRule.LOCATION_VELOCITY,
                    reason=(
                        f"Transaction from '{previous_location}' within the last "
                        f"{int(self.velocity_window.total_seconds() // 60)} minutes"
                    ),
                )
        return None

    def _check_foreign_country(self, candidate: _Candidate) -> ClassificationResult | None:
        user_country = normalize_country(candidate.user_country)
        if not user_country:
            return None

        location_country = parse_location_country(candidate.location)
        if not location_country:
            return None

        if same_country(user_country, location_country):
            return None

        return ClassificationResult(
            status=TransactionStatus.FLAGGED,
            rule=FraudRule.FOREIGN_COUNTRY,
            reason=f"Location country '{location_country}' differs from home '{user_country}'",
        )


_default_classifier = FraudClassifier()


def classify(
    amount: Decimal | float | int,
    location: str,
    user_country: str | None,
    recent_transactions: Iterable[Any] = (),
    now: datetime | None = None,
) -> TransactionStatus:
    """Classify a transaction with the default thresholds."""
    return _default_classifier.classify(amount, location, user_country, recent_transactions, now)
