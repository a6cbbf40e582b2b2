"""
Registration domain service - Sign-up transaction orchestration.

This module contains the core business logic for user registration:
validation, credential hashing, atomic persistence and session issuance.

Registration State Machine (single forward pass)
================================================

    RECEIVED -> VALIDATED -> HASHED -> PERSISTED -> TOKEN_ISSUED
             -> SESSION_ESTABLISHED

Every step may instead terminate the attempt:
- REJECTED(kind): client error raised by the validator, the hasher's
  length guard or the repository's uniqueness constraint
- FAILED(kind): server error from hashing, the store or token issuance

Nothing is retried. A committed user is kept when token issuance fails
unless rollback_on_token_failure is set, in which case the user and its
password history are removed before the failure is reported.
"""

import logging
from dataclasses import dataclass, field

from .exceptions import RegistrationError, RegistrationFailed, RegistrationRejected
from .hashing import CredentialHasher
from .models import RegistrationRequest, RegistrationResult, RegistrationState, TokenPair
from .ports import TokenIssuer, UserRepository
from .session import CookieDirective, SessionEstablisher
from .validation import RegistrationValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignUpOutcome:
    """Successful registration plus the cookies that carry its session."""

    result: RegistrationResult
    cookies: list[CookieDirective]

    @property
    def user_id(self) -> str:
        return self.result.user_id


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: validation, password hashing,
    persistence, token issuance and session cookie mapping. All
    collaborators are injected; the service holds no per-request state.
    """

    repository: UserRepository
    token_issuer: TokenIssuer
    hasher: CredentialHasher = field(default_factory=CredentialHasher)
    validator: RegistrationValidator = field(default_factory=RegistrationValidator)
    session_establisher: SessionEstablisher = field(default_factory=SessionEstablisher)
    rollback_on_token_failure: bool = False

    def register(self, request: RegistrationRequest) -> SignUpOutcome:
        """
        Register a new user and establish their session.

        Args:
            request: Decoded sign-up payload

        Returns:
            SignUpOutcome with the new user's id, tokens and cookies

        Raises:
            RegistrationRejected: client error (validation, too-long
                password, duplicate identity)
            RegistrationFailed: server error (hashing, store, tokens)
        """
        state = RegistrationState.RECEIVED
        try:
            email = self.validator.validate(request)
            state = self._advance(state, RegistrationState.VALIDATED)

            password_hash = self.hasher.hash(request.password)
            state = self._advance(state, RegistrationState.HASHED)

            user_id = self.repository.register(request.username, password_hash, email)
            state = self._advance(state, RegistrationState.PERSISTED)

            tokens = self._issue_tokens(user_id)
            state = self._advance(state, RegistrationState.TOKEN_ISSUED)

            cookies = self.session_establisher.establish(tokens)
            state = self._advance(state, RegistrationState.SESSION_ESTABLISHED)
        except RegistrationRejected as exc:
            logger.info("Registration rejected after %s: %s", state.value, exc.kind)
            self._advance(state, RegistrationState.REJECTED)
            raise
        except RegistrationFailed as exc:
            logger.error("Registration failed after %s: %s (%s)", state.value, exc.kind, exc)
            self._advance(state, RegistrationState.FAILED)
            raise

        logger.info("Registration complete for user %s", user_id)
        return SignUpOutcome(
            result=RegistrationResult(user_id=user_id, tokens=tokens, state=state),
            cookies=cookies,
        )

    def _issue_tokens(self, user_id: str) -> TokenPair:
        try:
            return self.token_issuer.issue(user_id)
        except RegistrationFailed:
            if self.rollback_on_token_failure:
                self._compensate(user_id)
            raise

    def _compensate(self, user_id: str) -> None:
        """Remove a committed user whose session could not be issued."""
        try:
            self.repository.remove(user_id)
        except RegistrationError as exc:
            # The token failure is still what the caller sees.
            logger.error("Could not roll back user %s: %s (%s)", user_id, exc.kind, exc)
        else:
            logger.warning("Rolled back user %s after token issuance failure", user_id)

    @staticmethod
    def _advance(current: RegistrationState, target: RegistrationState) -> RegistrationState:
        logger.debug("Registration %s -> %s", current.value, target.value)
        return target
