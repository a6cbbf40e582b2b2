"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Fast collaborators (low-cost bcrypt, test JWT issuer)
- A PostgreSQL pool for integration/adversarial tests, skipped when the
  database at DATABASE_URL is unreachable
"""

from collections.abc import Generator
from datetime import timedelta

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.adapters.tokens import JWTTokenIssuer
from src.config.settings import get_settings
from src.domain.hashing import CredentialHasher
from tests.factories import FAST_ROUNDS, TEST_SECRET


@pytest.fixture
def hasher() -> CredentialHasher:
    return CredentialHasher(rounds=FAST_ROUNDS)


@pytest.fixture
def token_issuer() -> JWTTokenIssuer:
    return JWTTokenIssuer(
        secret_key=TEST_SECRET,
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Migrated PostgreSQL pool; skips the requesting test if unreachable."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=3)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty users and password_history before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM password_history")
        conn.execute("DELETE FROM users")
        conn.commit()
    yield
