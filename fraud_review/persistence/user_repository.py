"""User repository using SQLAlchemy 2.0 async with raw SQL.

Table: fraud_review.users
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

_USER_COLUMNS = """
    id, email, password, username, full_name, country,
    phone_number, role, created_at, updated_at
"""

# Columns a caller may change through update()
_UPDATABLE_COLUMNS = ("password", "username", "full_name", "country", "phone_number", "role")


class UserRepository:
    """Repository for fraud_review.users data access."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> dict[str, Any] | None:
        """Get user by ID."""
        result = await self.session.execute(
            text(f"""
                SELECT {_USER_COLUMNS}
                FROM fraud_review.users
                WHERE id = :user_id
            """),
            {"user_id": user_id},
        )
        row = result.fetchone()
        if row is None:
            return None
        return self._row_to_dict(row)

    async def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Get user by email address."""
        result = await self.session.execute(
            text(f"""
                SELECT {_USER_COLUMNS}
                FROM fraud_review.users
                WHERE email = :email
            """),
            {"email": email},
        )
        row = result.fetchone()
        if row is None:
            return None
        return self._row_to_dict(row)

    async def create(
        self,
        user_id: UUID,
        email: str,
        password_hash: str,
        username: str,
        country: str,
        full_name: str | None = None,
        phone_number: str | None = None,
        role: str = "user",
    ) -> dict[str, Any] | None:
        """Create a new user."""
        await self.session.execute(
            text("""
                INSERT INTO fraud_review.users (
                    id, email, password, username, full_name, country,
                    phone_number, role, created_at, updated_at
                ) VALUES (
                    :id, :email, :password, :username, :full_name, :country,
                    :phone_number, :role, NOW(), NOW()
                )
            """),
            {
                "id": user_id,
                "email": email,
                "password": password_hash,
                "username": username,
                "full_name": full_name,
                "country": country,
                "phone_number": phone_number,
                "role": role,
            },
        )
        return await self.get_by_id(user_id)

    async def update(self, user_id: UUID, **fields: Any) -> dict[str, Any] | None:
        """Update the given columns and bump updated_at.

        Unknown column names are rejected rather than interpolated.
        """
        unknown = set(fields) - set(_UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update user columns: {sorted(unknown)}")

        update_fields = [
            f"{column} = :{column}" for column in _UPDATABLE_COLUMNS if column in fields
        ]
        update_fields.append("updated_at = NOW()")
        params: dict[str, Any] = {"user_id": user_id, **fields}

        await self.session.execute(
            text(f"""
                UPDATE fraud_review.users
                SET {", ".join(update_fields)}
                WHERE id = :user_id
            """),
            params,
        )
        return await self.get_by_id(user_id)

    def _row_to_dict(self, row) -> dict[str, Any]:
        """Convert a database row to a dictionary."""
        return {
            "id": row[0],
            "email": row[1],
            "password": row[2],
            "username": row[3],
            "full_name": row[4],
            "country": row[5],
            "phone_number": row[6],
            "role": row[7],
            "created_at": row[8],
            "updated_at": row[9],
        }
