#!/usr/bin/env python3
"""
Fraud Review Database Setup Script

Supports:
- init: First-time schema creation
- reset: Drop and recreate tables (--mode=data|schema)
- verify: Check DB connectivity and schema
- seed: Add demo users and transactions (--demo)

Usage:
    python scripts/setup_database.py --yes init --demo
    python scripts/setup_database.py --yes reset --mode schema
    python scripts/setup_database.py verify
    python scripts/setup_database.py seed --demo

The uv run db-* commands in cli/db_setup.py wrap these.

Environment Variables:
- DATABASE_URL_ADMIN: Admin connection with schema creation permissions (primary)
- DATABASE_URL_APP: Fallback when no admin URL is configured
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import psycopg
from psycopg.rows import dict_row

from fraud_review.core.config import DatabaseConfig
from fraud_review.core.security.passwords import hash_password

EXPECTED_TABLES = ["transactions", "users"]

# (email, password, username, full_name, country, role)
DEMO_USERS = [
    ("admin@example.com", "admin123", "admin", "Demo Administrator", "France", "admin"),
    ("demo@example.com", "demo123", "demo", "Demo User", "France", "user"),
]


@dataclass
class SetupResult:
    """Result of a setup step."""

    success: bool
    message: str
    details: str | None = None


class ResetMode(Enum):
    """Database reset modes."""

    SCHEMA = "schema"
    DATA = "data"


def to_psycopg_url(url: str) -> str:
    """Strip any SQLAlchemy driver suffix so psycopg accepts the URL."""
    for driver in ("postgresql+asyncpg://", "postgresql+psycopg://"):
        if url.startswith(driver):
            return "postgresql://" + url.removeprefix(driver)
    return url


def resolve_admin_url(cli_url: str | None, config: DatabaseConfig) -> str:
    """Pick the setup URL: --admin-url, then DATABASE_URL_ADMIN, then DATABASE_URL_APP."""
    return cli_url or config.url_admin or config.url_app


class DatabaseSetup:
    """Handles database setup for the Fraud Review service."""

    def __init__(self, admin_url: str):
        self.admin_url = to_psycopg_url(admin_url)
        self.repo_root = Path(__file__).parent.parent

    def _load_sql_file(self, filename: str) -> str:
        """Load SQL file from db directory."""
        sql_path = self.repo_root / "db" / filename
        if not sql_path.exists():
            raise FileNotFoundError(f"SQL file not found: {sql_path}")
        return sql_path.read_text(encoding="utf-8")

    def _split_sql_statements(self, sql_content: str) -> list[str]:
        """Split SQL into statements, keeping BEGIN ... COMMIT blocks together."""
        statements: list[str] = []
        current: list[str] = []
        in_transaction = False

        for line in sql_content.splitlines():
            stripped = line.strip()
            if not stripped or (stripped.startswith("--") and not current):
                continue

            upper = stripped.upper()
            if upper.startswith("BEGIN"):
                in_transaction = True
                continue
            if upper.startswith("COMMIT"):
                in_transaction = False
                continue

            current.append(line)
            if stripped.endswith(";"):
                statements.append("\n".join(current))
                current = []

        if in_transaction:
            raise ValueError("Unterminated BEGIN block in SQL file")
        if current:
            statements.append("\n".join(current))
        return statements

    def _execute_sql(
        self, conn: psycopg.Connection, sql_content: str, description: str
    ) -> SetupResult:
        """Execute SQL content in one transaction."""
        try:
            statements = self._split_sql_statements(sql_content)
            for stmt in statements:
                conn.execute(stmt)
            conn.commit()
            return SetupResult(
                success=True,
                message=description,
                details=f"Executed {len(statements)} statements",
            )
        except psycopg.Error as e:
            conn.rollback()
            return SetupResult(
                success=False,
                message=description,
                details=f"{type(e).__name__}: {e}",
            )

    def _seed_demo(self, conn: psycopg.Connection) -> SetupResult:
        """Insert demo users with freshly hashed passwords, then demo transactions."""
        try:
            for email, password, username, full_name, country, role in DEMO_USERS:
                conn.execute(
                    """
                    INSERT INTO fraud_review.users
                        (email, password, username, full_name, country, role)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    ON CONFLICT (email) DO NOTHING
                    """,
                    (email, hash_password(password), username, full_name, country, role),
                )
            conn.commit()
        except psycopg.Error as e:
            conn.rollback()
            return SetupResult(
                success=False,
                message="Demo user insertion failed",
                details=f"{type(e).__name__}: {e}",
            )

        return self._execute_sql(
            conn, self._load_sql_file("seed_demo.sql"), "Demo data insertion failed"
        )

    def init(self, demo: bool = False) -> int:
        """Initialize database schema."""
        print("Initializing database schema...")

        schema_sql = self._load_sql_file("schema.sql")

        try:
            with psycopg.connect(self.admin_url, autocommit=False) as conn:
                print("  Applying schema...")
                result = self._execute_sql(conn, schema_sql, "Schema creation failed")
                if not result.success:
                    print(f"ERROR: {result.details}")
                    return 1
                print(f"  Schema applied: {result.details}")

                if demo:
                    print("  Applying demo data...")
                    result = self._seed_demo(conn)
                    if not result.success:
                        print(f"ERROR: {result.details}")
                        return 1
                    print(f"  Demo data applied: {result.details}")

        except psycopg.Error as e:
            print(f"ERROR: Database connection failed: {e}")
            return 1

        print("Database initialization complete.")
        return 0

    def reset(self, mode: ResetMode, force: bool = False) -> int:
        """Reset database tables (schema or data mode)."""
        print(f"Resetting database tables ({mode.value})...")

        if not force:
            response = input("This will destroy all fraud_review data. Continue? [y/N]: ")
            if response.lower() != "y":
                print("Aborted.")
                return 1

        try:
            with psycopg.connect(self.admin_url, autocommit=False) as conn:
                if mode == ResetMode.SCHEMA:
                    print("  Dropping tables...")
                    conn.execute("DROP TABLE IF EXISTS fraud_review.transactions CASCADE")
                    conn.execute("DROP TABLE IF EXISTS fraud_review.users CASCADE")
                    conn.commit()
                    print("  Tables dropped.")

                    print("  Applying schema...")
                    schema_sql = self._load_sql_file("schema.sql")
                    result = self._execute_sql(conn, schema_sql, "Schema recreation failed")
                    if not result.success:
                        print(f"ERROR: {result.details}")
                        return 1
                    print(f"  Schema applied: {result.details}")
                else:
                    print("  Truncating tables...")
                    conn.execute(
                        "TRUNCATE TABLE fraud_review.transactions, fraud_review.users CASCADE"
                    )
                    conn.commit()
                    print("  Tables truncated.")

        except psycopg.Error as e:
            print(f"ERROR: Database reset failed: {e}")
            return 1

        print("Database reset complete.")
        return 0

    def seed(self, demo: bool = False) -> int:
        """Apply seed data."""
        print("Seeding database...")

        if not demo:
            print("  No demo data specified. Use --demo flag.")
            return 1

        try:
            with psycopg.connect(self.admin_url, autocommit=False) as conn:
                print("  Applying demo data...")
                result = self._seed_demo(conn)
                if not result.success:
                    print(f"ERROR: {result.details}")
                    return 1
                print(f"  Demo data applied: {result.details}")

        except psycopg.Error as e:
            print(f"ERROR: Database seed failed: {e}")
            return 1

        print("Demo data seeded.")
        return 0

    def verify(self) -> int:
        """Verify database setup."""
        print("Verifying database setup...")

        errors: list[str] = []

        try:
            with psycopg.connect(self.admin_url, autocommit=True, row_factory=dict_row) as conn:
                print("  [OK] Database connection")

                result = conn.execute("""
                    SELECT table_name FROM information_schema.tables
                    WHERE table_schema = 'fraud_review'
                    AND table_name IN ('users', 'transactions')
                    ORDER BY table_name
                """).fetchall()
                tables = [row["table_name"] for row in result]
                missing = [t for t in EXPECTED_TABLES if t not in tables]
                if missing:
                    errors.append(f"Missing tables: {missing}")
                else:
                    print(f"  [OK] Tables exist: {', '.join(tables)}")

                result = conn.execute("""
                    SELECT indexname FROM pg_indexes
                    WHERE schemaname = 'fraud_review'
                    AND tablename = 'transactions'
                """).fetchall()
                indexes = [row["indexname"] for row in result]
                if indexes:
                    print(f"  [OK] Indexes on transactions: {len(indexes)}")
                else:
                    errors.append("No indexes found on fraud_review.transactions")
        except psycopg.Error as e:
            errors.append(f"Database check failed: {e}")

        if errors:
            print("\nVerification FAILED:")
            for err in errors:
                print(f"  - {err}")
            return 1

        print("\nVerification PASSED.")
        return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Fraud Review - Database Setup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--admin-url",
        help="Admin database URL (overrides env var)",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Skip confirmation prompts",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="First-time setup")
    init_parser.add_argument("--demo", action="store_true", help="Include demo data")

    reset_parser = subparsers.add_parser("reset", help="Reset database")
    reset_parser.add_argument(
        "--mode",
        choices=["schema", "data"],
        default="schema",
        help="Reset mode: schema (drop/recreate) or data (truncate only)",
    )
    reset_parser.add_argument("--force", action="store_true", help="Bypass safety checks")

    seed_parser = subparsers.add_parser("seed", help="Apply seed data")
    seed_parser.add_argument("--demo", action="store_true", help="Include demo data")

    subparsers.add_parser("verify", help="Verify database setup")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    admin_url = resolve_admin_url(args.admin_url, DatabaseConfig())

    if not admin_url:
        print("ERROR: DATABASE_URL_ADMIN is required")
        print("Set it as environment variable or via --admin-url")
        return 2

    setup = DatabaseSetup(admin_url=admin_url)

    if args.command == "init":
        return setup.init(demo=args.demo)
    elif args.command == "reset":
        return setup.reset(mode=ResetMode(args.mode), force=args.force or args.yes)
    elif args.command == "seed":
        return setup.seed(demo=args.demo)
    elif args.command == "verify":
        return setup.verify()

    return 0


if __name__ == "__main__":
    sys.exit(main())
