"""
Shared fixtures for integration tests.

Requires PostgreSQL (DATABASE_URL); tests are skipped when it is unreachable.
"""

from collections.abc import AsyncGenerator

import psycopg
import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool

from user_service.adapters.repository.postgres import PostgresAccountRepository, run_migrations
from user_service.config.settings import get_settings


@pytest_asyncio.fixture
async def pool() -> AsyncGenerator[AsyncConnectionPool, None]:
    """Open a pool, run migrations and empty the users table."""
    settings = get_settings()
    try:
        conn = await psycopg.AsyncConnection.connect(settings.database_url, connect_timeout=2)
    except psycopg.OperationalError as exc:
        pytest.skip(f"PostgreSQL unavailable: {exc}")
    await conn.close()

    pool = AsyncConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=False)
    await pool.open()
    await run_migrations(pool)
    async with pool.connection() as conn:
        await conn.execute("DELETE FROM users")
        await conn.commit()
    yield pool
    await pool.close()


@pytest.fixture
def pg_repository(pool: AsyncConnectionPool) -> PostgresAccountRepository:
    """Create repository instance for each test."""
    return PostgresAccountRepository(pool)
