"""
Unit tests for domain ports, exceptions and purity.

Tests verify:
- Exceptions are split into client rejections and server failures
- Adapters satisfy the port interfaces structurally
- Domain purity (zero framework imports)
"""

from pathlib import Path

import pytest

from src.adapters.repository.memory import InMemoryUserRepository
from src.adapters.repository.postgres import PostgresUserRepository
from src.adapters.tokens import JWTTokenIssuer
from src.domain import exceptions
from src.domain.exceptions import (
    DuplicateIdentity,
    RegistrationError,
    RegistrationFailed,
    RegistrationRejected,
)
from src.domain.models import RegistrationState

DOMAIN_DIR = Path(__file__).resolve().parents[2] / "src" / "domain"

REJECTIONS = [
    "TermsNotAccepted",
    "InvalidUsername",
    "InvalidEmail",
    "PasswordMismatch",
    "WeakPassword",
    "CredentialTooLong",
    "DuplicateIdentity",
]
FAILURES = ["HashingFailed", "StoreUnavailable", "StoreOperationFailed", "TokenIssuanceFailed"]


class TestExceptionTaxonomy:
    @pytest.mark.parametrize("name", REJECTIONS)
    def test_client_errors_are_rejections(self, name: str) -> None:
        """Client-side kinds derive from RegistrationRejected."""
        cls = getattr(exceptions, name)
        assert issubclass(cls, RegistrationRejected)
        assert not issubclass(cls, RegistrationFailed)
        assert cls.kind == name

    @pytest.mark.parametrize("name", FAILURES)
    def test_server_errors_are_failures(self, name: str) -> None:
        """Server-side kinds derive from RegistrationFailed."""
        cls = getattr(exceptions, name)
        assert issubclass(cls, RegistrationFailed)
        assert not issubclass(cls, RegistrationRejected)
        assert cls.kind == name

    def test_all_share_base(self) -> None:
        """Both branches share RegistrationError."""
        for name in REJECTIONS + FAILURES:
            assert issubclass(getattr(exceptions, name), RegistrationError)

    def test_duplicate_identity_names_field(self) -> None:
        """DuplicateIdentity records which field collided."""
        exc = DuplicateIdentity("email")
        assert exc.field == "email"
        assert "email" in str(exc)


class TestPortConformance:
    """Adapters implement every port method (structural subtyping)."""

    @pytest.mark.parametrize("adapter", [InMemoryUserRepository, PostgresUserRepository])
    def test_repositories(self, adapter: type) -> None:
        """Repository adapters provide every UserRepository method."""
        assert callable(getattr(adapter, "register", None))
        assert callable(getattr(adapter, "remove", None))

    def test_token_issuer(self) -> None:
        """JWTTokenIssuer provides TokenIssuer.issue."""
        assert callable(getattr(JWTTokenIssuer, "issue", None))


class TestRegistrationState:
    def test_forward_states_in_order(self) -> None:
        """Forward states are declared in pass order."""
        names = [state.name for state in RegistrationState]
        assert names[:6] == [
            "RECEIVED",
            "VALIDATED",
            "HASHED",
            "PERSISTED",
            "TOKEN_ISSUED",
            "SESSION_ESTABLISHED",
        ]

    def test_terminal_error_states(self) -> None:
        """REJECTED and FAILED exist as terminal states."""
        assert RegistrationState.REJECTED.value == "REJECTED"
        assert RegistrationState.FAILED.value == "FAILED"


class TestDomainPurity:
    """Domain layer must not import web or database frameworks."""

    @pytest.mark.parametrize("module", ["fastapi", "pydantic", "psycopg", "jwt"])
    def test_no_framework_imports(self, module: str) -> None:
        """Domain modules import no web or database framework."""
        for path in DOMAIN_DIR.glob("*.py"):
            source = path.read_text(encoding="utf-8")
            assert f"from {module}" not in source, f"{module} imported in {path.name}"
            assert f"import {module}" not in source, f"{module} imported in {path.name}"
