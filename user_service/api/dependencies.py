"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Request, status
from psycopg_pool import AsyncConnectionPool

from user_service.adapters.repository.postgres import PostgresAccountRepository
from user_service.adapters.smtp.console import ConsoleNotifier
from user_service.adapters.smtp.sender import SmtpNotifier
from user_service.config.settings import Settings, get_settings
from user_service.domain.accounts import AccountService, TokenPolicy
from user_service.domain.credentials import CredentialHasher
from user_service.domain.exceptions import InvalidTokenError
from user_service.domain.models import SessionContext
from user_service.domain.ports import Notifier
from user_service.domain.tokens import TokenIssuer

# Module-level singleton - TokenIssuer is stateless
_token_issuer = TokenIssuer()


def get_pool(request: Request) -> AsyncConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


@lru_cache
def get_notifier() -> Notifier:
    """Build the configured notifier once per process."""
    settings = get_settings()
    if settings.email_backend == "smtp":
        return SmtpNotifier(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleNotifier()


def build_token_policy(settings: Settings) -> TokenPolicy:
    """Translate configured lifetimes (seconds) into a TokenPolicy."""
    access_ttl = settings.access_token_ttl_seconds
    return TokenPolicy(
        activation_ttl=timedelta(seconds=settings.activation_ttl_seconds),
        access_ttl=timedelta(seconds=access_ttl) if access_ttl is not None else None,
        refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
    )


def get_account_service(request: Request) -> AccountService:
    """
    Create the account service with injected dependencies.

    Wires together the repository, notifier, hasher and token issuer.
    """
    settings = get_settings()
    return AccountService(
        repository=get_repository(request),
        notifier=get_notifier(),
        token_secrets=settings.token_secrets(),
        hasher=CredentialHasher(cost=settings.bcrypt_cost),
        tokens=_token_issuer,
        policy=build_token_policy(settings),
    )


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session(
    authorization: str | None = Header(default=None),
    access_token: str | None = Header(default=None, alias="accesstoken"),
    refresh_token: str | None = Header(default=None, alias="refreshtoken"),
    service: AccountService = Depends(get_account_service),
) -> SessionContext:
    """
    Authenticate the request and return its session.

    Tokens are read from the ``accesstoken``/``refreshtoken`` headers, with
    ``Authorization: Bearer`` accepted for the access token.

    Raises:
        HTTPException: 401 when no token authenticates an account
    """
    try:
        return await service.authenticate(
            access_token or _bearer_token(authorization), refresh_token
        )
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from None


async def get_optional_session(
    authorization: str | None = Header(default=None),
    access_token: str | None = Header(default=None, alias="accesstoken"),
    refresh_token: str | None = Header(default=None, alias="refreshtoken"),
    service: AccountService = Depends(get_account_service),
) -> SessionContext:
    """Like get_session, but an unauthenticated request gets an empty session."""
    try:
        return await service.authenticate(
            access_token or _bearer_token(authorization), refresh_token
        )
    except InvalidTokenError:
        return SessionContext()
