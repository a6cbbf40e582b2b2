"""Builders for sign-up payloads, domain requests and table counts used across tests."""

from src.domain.models import RegistrationRequest

TEST_SECRET = "test-signing-key-0123456789abcdef0123456789"

# bcrypt minimum cost keeps the suite fast
FAST_ROUNDS = 4


def make_payload(**overrides: object) -> dict:
    """JSON body for POST /v1/signup."""
    payload = {
        "username": "alice",
        "password": "Str0ng!Pass",
        "confirmPassword": "Str0ng!Pass",
        "email": "alice@example.com",
        "termsAccepted": True,
    }
    payload.update(overrides)
    return payload


def make_request(**overrides: object) -> RegistrationRequest:
    """Domain RegistrationRequest with valid defaults."""
    fields = {
        "username": "alice",
        "password": "Str0ng!Pass",
        "confirm_password": "Str0ng!Pass",
        "email": "alice@example.com",
        "terms_accepted": True,
    }
    fields.update(overrides)
    return RegistrationRequest(**fields)


def count_rows(pool, table: str) -> int:
    """Row count of a table (integration tests only)."""
    with pool.connection() as conn, conn.cursor() as cursor:
        cursor.execute(f"SELECT COUNT(*) FROM {table}")
        return cursor.fetchone()[0]
