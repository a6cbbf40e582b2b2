"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Two families exist:
- RegistrationRejected: the submitted data is at fault; the caller may
  correct it and resubmit.
- RegistrationFailed: a server-side collaborator failed; the caller is
  not at fault and receives an opaque error.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    kind = "RegistrationError"


class RegistrationRejected(RegistrationError):
    """Client error - the registration data was refused."""

    kind = "RegistrationRejected"


class RegistrationFailed(RegistrationError):
    """Server error - a collaborator could not complete its step."""

    kind = "RegistrationFailed"


class TermsNotAccepted(RegistrationRejected):
    """Terms of service were not accepted."""

    kind = "TermsNotAccepted"


class InvalidUsername(RegistrationRejected):
    """Username violates the character set or length policy."""

    kind = "InvalidUsername"


class InvalidEmail(RegistrationRejected):
    """Email address is not syntactically valid."""

    kind = "InvalidEmail"


class PasswordMismatch(RegistrationRejected):
    """Password and confirmation differ."""

    kind = "PasswordMismatch"


class WeakPassword(RegistrationRejected):
    """Password does not satisfy the strength policy."""

    kind = "WeakPassword"


class CredentialTooLong(RegistrationRejected):
    """Password exceeds the hashing primitive's 72-byte input limit."""

    kind = "CredentialTooLong"


class DuplicateIdentity(RegistrationRejected):
    """Username or email is already registered."""

    kind = "DuplicateIdentity"

    def __init__(self, field: str = "identity") -> None:
        super().__init__(f"{field} already registered")
        self.field = field


class HashingFailed(RegistrationFailed):
    """The hashing primitive failed."""

    kind = "HashingFailed"


class StoreUnavailable(RegistrationFailed):
    """The durable store could not be reached or timed out."""

    kind = "StoreUnavailable"


class StoreOperationFailed(RegistrationFailed):
    """The durable store rejected a statement for a non-conflict reason."""

    kind = "StoreOperationFailed"


class TokenIssuanceFailed(RegistrationFailed):
    """Access or refresh token could not be produced."""

    kind = "TokenIssuanceFailed"
