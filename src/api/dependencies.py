"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Request

from src.adapters.tokens import JWTTokenIssuer
from src.config.settings import get_settings
from src.domain.hashing import CredentialHasher
from src.domain.ports import UserRepository
from src.domain.registration import RegistrationService
from src.domain.session import SessionEstablisher
from src.domain.validation import (
    PasswordPolicy,
    RegistrationValidator,
    UsernamePolicy,
    load_common_passwords,
)


def get_repository(request: Request) -> UserRepository:
    """
    Get the user repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


@lru_cache
def get_validator() -> RegistrationValidator:
    """Build the validator from the configured policies (once)."""
    settings = get_settings()
    return RegistrationValidator(
        username_policy=UsernamePolicy(
            min_length=settings.username_min_length,
            max_length=settings.username_max_length,
        ),
        password_policy=PasswordPolicy(
            min_length=settings.password_min_length,
            require_uppercase=settings.password_require_uppercase,
            require_lowercase=settings.password_require_lowercase,
            require_digit=settings.password_require_digit,
            require_special=settings.password_require_special,
            common_passwords=load_common_passwords(settings.common_passwords_file),
        ),
    )


@lru_cache
def get_hasher() -> CredentialHasher:
    """Get bcrypt hasher with the configured cost factor (singleton)."""
    return CredentialHasher(rounds=get_settings().bcrypt_cost)


@lru_cache
def get_token_issuer() -> JWTTokenIssuer:
    """Get JWT issuer configured from settings (singleton)."""
    settings = get_settings()
    return JWTTokenIssuer(
        secret_key=settings.jwt_secret_key,
        access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        refresh_ttl=timedelta(days=settings.refresh_token_expire_days),
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
    )


@lru_cache
def get_session_establisher() -> SessionEstablisher:
    """Get cookie mapper for the configured domain (singleton)."""
    return SessionEstablisher(domain=get_settings().cookie_domain)


def get_registration_service(
    repository: UserRepository = Depends(get_repository),
    token_issuer: JWTTokenIssuer = Depends(get_token_issuer),
    hasher: CredentialHasher = Depends(get_hasher),
    validator: RegistrationValidator = Depends(get_validator),
    session_establisher: SessionEstablisher = Depends(get_session_establisher),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, hasher, validator, token issuer and
    session establisher for the domain service.
    """
    return RegistrationService(
        repository=repository,
        token_issuer=token_issuer,
        hasher=hasher,
        validator=validator,
        session_establisher=session_establisher,
        rollback_on_token_failure=get_settings().rollback_on_token_failure,
    )
