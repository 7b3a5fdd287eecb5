"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3's async pool with raw SQL.

The UNIQUE constraints on email and phone_number are the final guard
against duplicate accounts. The domain pre-checks both before creating,
but two activations racing past the pre-check are resolved here: the
loser's INSERT fails with UniqueViolation, surfaced as ConflictError.
"""

import logging
import uuid
from collections.abc import Sequence
from pathlib import Path

import psycopg
from psycopg_pool import AsyncConnectionPool

from user_service.domain.exceptions import ConflictError
from user_service.domain.models import Account, NewAccount

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, email, phone_number, password, created_at"

# user_service/adapters/repository/postgres.py -> <project root>/migrations
MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
        """
        self._pool = pool

    async def find_by_email(self, email: str) -> Account | None:
        return await self._fetch_one(f"SELECT {_COLUMNS} FROM users WHERE email = %s", email)

    async def find_by_phone(self, phone_number: str) -> Account | None:
        return await self._fetch_one(
            f"SELECT {_COLUMNS} FROM users WHERE phone_number = %s", phone_number
        )

    async def find_by_id(self, account_id: str) -> Account | None:
        return await self._fetch_one(f"SELECT {_COLUMNS} FROM users WHERE id = %s", account_id)

    async def create(self, account: NewAccount) -> Account:
        """
        Insert a new account row.

        Raises:
            ConflictError: If email or phone_number violates a UNIQUE constraint
        """
        sql = f"""
            INSERT INTO users (id, name, email, phone_number, password, created_at)
            VALUES (%s, %s, %s, %s, %s, NOW())
            RETURNING {_COLUMNS}
        """
        params = (
            str(uuid.uuid4()),
            account.name,
            account.email,
            account.phone_number,
            account.password,
        )

        async with self._pool.connection() as conn:
            try:
                async with conn.cursor() as cursor:
                    await cursor.execute(sql, params)
                    row = await cursor.fetchone()
                await conn.commit()
            except psycopg.errors.UniqueViolation as exc:
                await conn.rollback()
                constraint = getattr(exc.diag, "constraint_name", None) or "unique constraint"
                logger.warning("account insert rejected by %s", constraint)
                raise ConflictError(f"Account already exists ({constraint})") from exc

        return self._map_row(row)

    async def list_all(self) -> Sequence[Account]:
        sql = f"SELECT {_COLUMNS} FROM users ORDER BY created_at, id"
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            await cursor.execute(sql)
            rows = await cursor.fetchall()
        return [self._map_row(row) for row in rows]

    async def _fetch_one(self, sql: str, value: str) -> Account | None:
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            await cursor.execute(sql, (value,))
            row = await cursor.fetchone()
        return self._map_row(row) if row is not None else None

    def _map_row(self, row: tuple) -> Account:
        """Convert a raw database tuple into the domain ``Account``."""
        return Account(
            id=row[0],
            name=row[1],
            email=row[2],
            phone_number=row[3],
            password=row[4],
            created_at=row[5],
        )


async def run_migrations(pool: AsyncConnectionPool, directory: Path = MIGRATIONS_DIR) -> None:
    """
    Apply every ``*.sql`` file in ``directory`` in filename order.

    Files must be idempotent; all of them run in one transaction, so a
    failing file leaves the schema as it was.

    Raises:
        RuntimeError: If any migration fails
    """
    sql_files = sorted(directory.glob("*.sql")) if directory.is_dir() else []
    if not sql_files:
        logger.warning("No migrations found in %s", directory)
        return

    async with pool.connection() as conn:
        for sql_file in sql_files:
            logger.info("Applying migration %s", sql_file.name)
            try:
                await conn.execute(sql_file.read_text())
            except psycopg.Error as exc:
                await conn.rollback()
                raise RuntimeError(f"Database migration failed: {sql_file.name}") from exc
        await conn.commit()
    logger.info("Applied %d migration(s)", len(sql_files))
