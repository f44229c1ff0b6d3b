"""
Database setup commands.

These commands wrap scripts/setup_database.py. Connection URLs come from
DATABASE_URL_ADMIN (or DATABASE_URL_APP) in the environment.

Usage:
    uv run db-init          # First-time setup
    uv run db-init --demo   # First-time setup with demo users and transactions
    uv run db-reset-data    # Truncate tables
    uv run db-reset-schema  # Drop and recreate tables
    uv run db-verify        # Verify setup
    uv run db-seed-demo     # Seed with demo data
"""

from __future__ import annotations

import sys
from pathlib import Path

from cli._runner import run

_SCRIPTS_DIR = Path(__file__).parent.parent / "scripts"
_SETUP_DB_SCRIPT = _SCRIPTS_DIR / "setup_database.py"


def _validated_passthrough_args(
    raw_args: list[str],
    *,
    allowed_flags: set[str],
    command_name: str,
) -> list[str]:
    """Return raw_args after checking every token is an allowed flag."""
    for token in raw_args:
        if token not in allowed_flags:
            allowed = " ".join(sorted(allowed_flags))
            raise SystemExit(
                f"Unsupported argument '{token}' for {command_name}. Allowed: {allowed}"
            )
    return list(raw_args)


def _setup_db(*args: str) -> int:
    return run([sys.executable, str(_SETUP_DB_SCRIPT), *args])


def db_init() -> None:
    """First-time database setup."""
    passthrough = _validated_passthrough_args(
        sys.argv[1:],
        allowed_flags={"--demo"},
        command_name="db-init",
    )
    sys.exit(_setup_db("--yes", "init", *passthrough))


def db_reset_data() -> None:
    """Reset database (data mode - truncate tables)."""
    sys.exit(_setup_db("--yes", "reset", "--mode", "data"))


def db_reset_schema() -> None:
    """Reset database (schema mode - drop and recreate tables)."""
    sys.exit(_setup_db("--yes", "reset", "--mode", "schema"))


def db_verify() -> None:
    """Verify database setup."""
    sys.exit(_setup_db("verify"))


def db_seed_demo() -> None:
    """Apply demo seed data."""
    sys.exit(_setup_db("seed", "--demo"))
