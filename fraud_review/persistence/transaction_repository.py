"""Transaction repository using SQLAlchemy 2.0 async with raw SQL.

Table: fraud_review.transactions

"timestamp" is quoted throughout; it is a type keyword in PostgreSQL.
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from fraud_review.domain.models.transaction import TransactionStatus

logger = logging.getLogger(__name__)

_TRANSACTION_COLUMNS = """
    id, user_id, amount, location, description, status, "timestamp", created_at
"""

# Allowed status values for validation (matches TransactionStatus enum)
_ALLOWED_STATUSES = {s.value for s in TransactionStatus}


class TransactionRepository:
    """Repository for fraud_review.transactions data access."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, transaction_id: UUID) -> dict[str, Any] | None:
        """Get transaction by ID."""
        result = await self.session.execute(
            text(f"""
                SELECT {_TRANSACTION_COLUMNS}
                FROM fraud_review.transactions
                WHERE id = :transaction_id
            """),
            {"transaction_id": transaction_id},
        )
        row = result.fetchone()
        if row is None:
            return None
        return self._row_to_dict(row)

    async def list_by_user(self, user_id: UUID) -> list[dict[str, Any]]:
        """List a user's transactions, newest first."""
        result = await self.session.execute(
            text(f"""
                SELECT {_TRANSACTION_COLUMNS}
                FROM fraud_review.transactions
                WHERE user_id = :user_id
                ORDER BY "timestamp" DESC
            """),
            {"user_id": user_id},
        )
        return [self._row_to_dict(row) for row in result.fetchall()]

    async def list_all(self) -> list[dict[str, Any]]:
        """List every transaction, newest first."""
        result = await self.session.execute(
            text(f"""
                SELECT {_TRANSACTION_COLUMNS}
                FROM fraud_review.transactions
                ORDER BY "timestamp" DESC
            """),
        )
        return [self._row_to_dict(row) for row in result.fetchall()]

    async def create(
        self,
        transaction_id: UUID,
        user_id: UUID,
        amount: Decimal,
        location: str,
        status: str,
        description: str | None = None,
    ) -> dict[str, Any] | None:
        """Create a new transaction; timestamps are assigned by the database."""
        if status not in _ALLOWED_STATUSES:
            raise ValueError(f"Invalid transaction status: {status}")

        await self.session.execute(
            text("""
                INSERT INTO fraud_review.transactions (
                    id, user_id, amount, location, description, status,
                    "timestamp", created_at
                ) VALUES (
                    :id, :user_id, :amount, :location, :description, :status,
                    NOW(), NOW()
                )
            """),
            {
                "id": transaction_id,
                "user_id": user_id,
                "amount": amount,
                "location": location,
                "description": description,
                "status": status,
            },
        )
        return await self.get_by_id(transaction_id)

    async def update_status(self, transaction_id: UUID, status: str) -> dict[str, Any] | None:
        """Overwrite a transaction's status. Returns None if it does not exist."""
        if status not in _ALLOWED_STATUSES:
            raise ValueError(f"Invalid transaction status: {status}")

        result = await self.session.execute(
            text("""
                UPDATE fraud_review.transactions
                SET status = :status
                WHERE id = :transaction_id
            """),
            {"transaction_id": transaction_id, "status": status},
        )
        if result.rowcount == 0:
            return None
        return await self.get_by_id(transaction_id)

    async def delete(self, transaction_id: UUID) -> bool:
        """Delete a transaction."""
        result = await self.session.execute(
            text("DELETE FROM fraud_review.transactions WHERE id = :transaction_id"),
            {"transaction_id": transaction_id},
        )
        return result.rowcount > 0

    async def get_stats(self) -> dict[str, Any]:
        """Aggregate figures for the admin dashboard."""
        result = await self.session.execute(
            text("""
                SELECT
                    COUNT(*) AS total,
                    COALESCE(SUM(amount) FILTER (WHERE status = 'approved'), 0) AS approved_amount,
                    COUNT(*) FILTER (WHERE status = 'flagged') AS flagged_count,
                    COUNT(*) FILTER (WHERE status = 'pending') AS pending_count,
                    COUNT(*) FILTER (WHERE status = 'approved') AS approved_count
                FROM fraud_review.transactions
            """),
        )
        row = result.fetchone()
        return {
            "total_transactions": row[0] or 0,
            "approved_amount": row[1] if row[1] is not None else Decimal("0"),
            "flagged_count": row[2] or 0,
            "pending_count": row[3] or 0,
            "approved_count": row[4] or 0,
        }

    def _row_to_dict(self, row) -> dict[str, Any]:
        """Convert a database row to a dictionary."""
        return {
            "id": row[0],
            "user_id": row[1],
            "amount": row[2],
            "location": row[3],
            "description": row[4],
            "status": row[5],
            "timestamp": row[6],
            "created_at": row[7],
        }
