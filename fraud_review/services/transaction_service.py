"""Transaction service: submission with fraud classification, admin review."""

import logging
from datetime import timedelta
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from fraud_review.core.config import Settings, get_settings
from fraud_review.core.errors import NotFoundError
from fraud_review.domain.fraud_rules import FraudClassifier
from fraud_review.domain.models.transaction import PriorTransaction, TransactionStatus
from fraud_review.persistence.transaction_repository import TransactionRepository
from fraud_review.persistence.user_repository import UserRepository
from fraud_review.schemas.transaction import TransactionCreate

logger = logging.getLogger(__name__)


def build_classifier(settings: Settings) -> FraudClassifier:
    """Create a classifier from the configured rule thresholds."""
    return FraudClassifier(
        high_value_threshold=settings.fraud_rules.high_value_threshold,
        velocity_window=timedelta(minutes=settings.fraud_rules.velocity_window_minutes),
    )


class TransactionService:
    """Service for transaction operations."""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        classifier: FraudClassifier | None = None,
    ):
        self.session = session
        self.repository = TransactionRepository(session)
        self.users = UserRepository(session)
        self.classifier = classifier or build_classifier(settings or get_settings())

    async def list_for_user(self, user_id: UUID) -> list[dict]:
        """List the caller's own transactions, newest first."""
        return await self.repository.list_by_user(user_id)

    async def list_all(self) -> list[dict]:
        """List every transaction, newest first."""
        return await self.repository.list_all()

    async def create_transaction(self, user_id: UUID, data: TransactionCreate) -> dict:
        """Classify and persist a new transaction.

        The classifier sees the user's declared country and the transactions
        persisted before this one.
        """
        user = await self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", details={"user_id": str(user_id)})

        history = [
            PriorTransaction.model_validate(row)
            for row in await self.repository.list_by_user(user_id)
        ]
        result = self.classifier.evaluate(
            amount=data.amount,
            location=data.location,
            user_country=user["country"],
            recent_transactions=history,
        )

        transaction = await self.repository.create(
            transaction_id=uuid4(),
            user_id=user_id,
            amount=data.amount,
            location=data.location,
            description=data.description or None,
            status=result.status.value,
        )

        logger.info(
            "Transaction classified",
            extra={
                "transaction_id": str(transaction["id"]),
                "user_id": str(user_id),
                "status": result.status.value,
                "rule": result.rule.value if result.rule else None,
                "reason": result.reason,
                "history_size": len(history),
            },
        )
        return transaction

    async def update_status(self, transaction_id: UUID, status: TransactionStatus) -> dict:
        """Set a transaction's status directly (admin override, no classification)."""
        transaction = await self.repository.update_status(
            transaction_id, TransactionStatus(status).value
        )
        if transaction is None:
            raise NotFoundError(
                "Transaction not found", details={"transaction_id": str(transaction_id)}
            )

        logger.info(
            "Transaction status overridden",
            extra={"transaction_id": str(transaction_id), "status": transaction["status"]},
        )
        return transaction

    async def delete_transaction(self, transaction_id: UUID) -> None:
        """Delete a transaction."""
        deleted = await self.repository.delete(transaction_id)
        if not deleted:
            raise NotFoundError(
                "Transaction not found", details={"transaction_id": str(transaction_id)}
            )
        logger.info("Transaction deleted", extra={"transaction_id": str(transaction_id)})

    async def get_stats(self) -> dict:
        """Get admin dashboard figures."""
        return await self.repository.get_stats()
