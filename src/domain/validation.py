"""
Registration validation - Structural and policy checks on sign-up data.

Checks run in a fixed precedence and the first failure wins:

1. terms accepted            -> TermsNotAccepted
2. username policy           -> InvalidUsername
3. email syntax              -> InvalidEmail
4. password == confirmation  -> PasswordMismatch
5. password strength policy  -> WeakPassword

No store or network access happens here. Email syntax is checked with
email-validator without DNS deliverability lookups.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path

from email_validator import EmailNotValidError, validate_email

from .exceptions import (
    InvalidEmail,
    InvalidUsername,
    PasswordMismatch,
    TermsNotAccepted,
    WeakPassword,
)
from .models import RegistrationRequest

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

SPECIAL_CHARS = r"!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>\/?`~"

# Frequently breached passwords. Compared case-insensitively.
COMMON_PASSWORDS = frozenset(
    {
        "123456",
        "12345678",
        "123456789",
        "1234567890",
        "password",
        "password1",
        "password123",
        "password!",
        "p@ssw0rd",
        "p@ssw0rd1",
        "p@ssword1",
        "passw0rd!",
        "qwerty",
        "qwerty123",
        "qwerty123!",
        "abc123",
        "letmein",
        "letmein1!",
        "welcome",
        "welcome1",
        "welcome1!",
        "welcome123!",
        "admin",
        "admin123",
        "admin123!",
        "iloveyou",
        "iloveyou1!",
        "monkey",
        "dragon",
        "football",
        "baseball",
        "sunshine",
        "princess",
        "trustno1",
        "changeme",
        "changeme1!",
        "summer2024!",
        "winter2024!",
        "spring2024!",
        "autumn2024!",
    }
)


def load_common_passwords(path: str | None) -> frozenset[str]:
    """
    Build the deny list from the built-in set plus an optional file.

    The file holds one password per line; blank lines and lines starting
    with '#' are ignored.
    """
    if path is None:
        return COMMON_PASSWORDS

    extra = set()
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            extra.add(line.lower())
    logger.info("Loaded %d common passwords from %s", len(extra), path)
    return COMMON_PASSWORDS | frozenset(extra)


@dataclass(frozen=True)
class PasswordPolicy:
    """Password strength requirements."""

    min_length: int = 8
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True
    require_special: bool = True
    common_passwords: frozenset[str] = field(default=COMMON_PASSWORDS, repr=False)

    def violations(self, password: str) -> list[str]:
        """Return the names of every rule the password breaks."""
        problems = []
        if len(password) < self.min_length:
            problems.append("too_short")
        if self.require_uppercase and not re.search(r"[A-Z]", password):
            problems.append("no_uppercase")
        if self.require_lowercase and not re.search(r"[a-z]", password):
            problems.append("no_lowercase")
        if self.require_digit and not re.search(r"\d", password):
            problems.append("no_digit")
        if self.require_special and not re.search(f"[{SPECIAL_CHARS}]", password):
            problems.append("no_special")
        if password.lower() in self.common_passwords:
            problems.append("common")
        return problems


@dataclass(frozen=True)
class UsernamePolicy:
    """Allowed username shape: ASCII letters, digits and underscore."""

    min_length: int = 3
    max_length: int = 32

    def allows(self, username: str) -> bool:
        if not self.min_length <= len(username) <= self.max_length:
            return False
        return USERNAME_PATTERN.fullmatch(username) is not None


@dataclass(frozen=True)
class RegistrationValidator:
    """Pure validation of a RegistrationRequest."""

    username_policy: UsernamePolicy = field(default_factory=UsernamePolicy)
    password_policy: PasswordPolicy = field(default_factory=PasswordPolicy)

    def validate(self, request: RegistrationRequest) -> str:
        """
        Validate a registration request.

        Returns:
            The normalized email address to persist

        Raises:
            TermsNotAccepted, InvalidUsername, InvalidEmail,
            PasswordMismatch, WeakPassword: first failing check
        """
        if request.terms_accepted is not True:
            raise TermsNotAccepted("terms must be accepted")

        if not self.username_policy.allows(request.username):
            raise InvalidUsername("invalid username")

        email = normalize_email(request.email)

        if request.password != request.confirm_password:
            raise PasswordMismatch("passwords do not match")

        problems = self.password_policy.violations(request.password)
        if problems:
            logger.debug("Password rejected: %s", ", ".join(problems))
            raise WeakPassword("weak password")

        return email


def is_valid_email(email: str) -> bool:
    """Check email syntax only (no DNS lookups)."""
    try:
        normalize_email(email)
    except InvalidEmail:
        return False
    return True


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace, email-validator normalization (Unicode NFC,
    IDNA domain), lowercase. Equivalent spellings of one address come out
    as the same string.

    Raises:
        InvalidEmail: address is not syntactically valid
    """
    try:
        validated = validate_email(
            unicodedata.normalize("NFC", email.strip()), check_deliverability=False
        )
    except EmailNotValidError as exc:
        raise InvalidEmail("invalid email") from exc
    return validated.normalized.lower()
