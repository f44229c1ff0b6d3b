"""Transaction and user models shared across layers."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class TransactionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    FLAGGED = "flagged"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class PriorTransaction(BaseModel):
    """A previously persisted transaction, as seen by the fraud classifier."""

    location: str
    timestamp: datetime | None = None
