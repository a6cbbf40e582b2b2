"""
Tests for the application factory with the in-memory backend.

Runs the real lifespan and dependency wiring without PostgreSQL.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.api import dependencies
from src.api.main import app
from src.config.settings import get_settings
from src.domain.hashing import CredentialHasher
from tests.factories import FAST_ROUNDS, make_payload

CACHED = [
    get_settings,
    dependencies.get_validator,
    dependencies.get_hasher,
    dependencies.get_token_issuer,
    dependencies.get_session_establisher,
]


def clear_caches() -> None:
    for factory in CACHED:
        factory.cache_clear()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("REPOSITORY_BACKEND", "memory")
    monkeypatch.setenv("COOKIE_DOMAIN", "example.com")
    clear_caches()
    app.dependency_overrides[dependencies.get_hasher] = lambda: CredentialHasher(rounds=FAST_ROUNDS)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    clear_caches()


@pytest.fixture
def rollback_client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("REPOSITORY_BACKEND", "memory")
    monkeypatch.setenv("JWT_SECRET_KEY", "")
    monkeypatch.setenv("ROLLBACK_ON_TOKEN_FAILURE", "true")
    clear_caches()
    app.dependency_overrides[dependencies.get_hasher] = lambda: CredentialHasher(rounds=FAST_ROUNDS)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    clear_caches()


class TestMemoryBackend:
    def test_health(self, client: TestClient) -> None:
        """Health reports the in-memory store."""
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "store": "memory"}

    def test_signup_then_duplicate(self, client: TestClient) -> None:
        """The assembled app registers once and then conflicts."""
        first = client.post("/v1/signup", json=make_payload())
        second = client.post("/v1/signup", json=make_payload())

        assert first.status_code == 200
        assert second.status_code == 409

    def test_configured_cookie_domain(self, client: TestClient) -> None:
        """COOKIE_DOMAIN is applied to the session cookies."""
        response = client.post("/v1/signup", json=make_payload())

        for header in response.headers.get_list("set-cookie"):
            assert "domain=example.com" in header.lower()

    def test_issued_access_token_verifies(self, client: TestClient) -> None:
        """The access cookie decodes with the configured key."""
        response = client.post("/v1/signup", json=make_payload())

        headers = {h.split("=", 1)[0]: h for h in response.headers.get_list("set-cookie")}
        token = headers["jwt"].split(";", 1)[0].split("=", 1)[1]
        user = client.app.state.repository.users()[0]
        assert dependencies.get_token_issuer().decode(token)["sub"] == user.id


class TestTokenFailureRollback:
    def test_user_removed_and_identity_reusable(self, rollback_client: TestClient) -> None:
        """With rollback on, a token failure frees the identity."""
        response = rollback_client.post("/v1/signup", json=make_payload())

        assert response.status_code == 500
        assert response.json()["code"] == "AUTHENTICATION_FAILED"
        assert rollback_client.app.state.repository.users() == []
        assert rollback_client.app.state.repository.password_history() == []
