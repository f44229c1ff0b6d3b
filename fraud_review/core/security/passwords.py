"""Password hashing with bcrypt.

bcrypt only considers the first 72 bytes of a secret; longer passwords are
truncated before hashing and before comparison so both paths agree.

Usage:
    hashed = hash_password("s3cret!")
    verify_password("s3cret!", hashed)  # True
"""

from __future__ import annotations

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 10


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plaintext password, returning the bcrypt hash as text."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False
