"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the sign-up
transaction. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    CredentialTooLong,
    DuplicateIdentity,
    HashingFailed,
    InvalidEmail,
    InvalidUsername,
    PasswordMismatch,
    RegistrationError,
    RegistrationFailed,
    RegistrationRejected,
    StoreOperationFailed,
    StoreUnavailable,
    TermsNotAccepted,
    TokenIssuanceFailed,
    WeakPassword,
)
from .hashing import CredentialHasher
from .models import (
    PasswordHistoryEntry,
    RegistrationRequest,
    RegistrationResult,
    RegistrationState,
    TokenPair,
    User,
)
from .ports import TokenIssuer, UserRepository
from .registration import RegistrationService, SignUpOutcome
from .session import CookieDirective, SessionEstablisher
from .validation import PasswordPolicy, RegistrationValidator, UsernamePolicy

__all__ = [
    "CookieDirective",
    "CredentialHasher",
    "CredentialTooLong",
    "DuplicateIdentity",
    "HashingFailed",
    "InvalidEmail",
    "InvalidUsername",
    "PasswordHistoryEntry",
    "PasswordMismatch",
    "PasswordPolicy",
    "RegistrationError",
    "RegistrationFailed",
    "RegistrationRejected",
    "RegistrationRequest",
    "RegistrationResult",
    "RegistrationService",
    "RegistrationState",
    "RegistrationValidator",
    "SessionEstablisher",
    "SignUpOutcome",
    "StoreOperationFailed",
    "StoreUnavailable",
    "TermsNotAccepted",
    "TokenIssuanceFailed",
    "TokenIssuer",
    "TokenPair",
    "User",
    "UserRepository",
    "UsernamePolicy",
    "WeakPassword",
]
