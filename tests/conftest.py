"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock for token expiry
- In-memory repository and a recording notifier
- A fully wired AccountService
"""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import pytest

from user_service.adapters.repository.memory import InMemoryAccountRepository
from user_service.domain.accounts import AccountService, TokenPolicy
from user_service.domain.credentials import CredentialHasher
from user_service.domain.tokens import TokenIssuer, TokenSecrets

# bcrypt's minimum cost keeps the suite fast; production uses 10
TEST_BCRYPT_COST = 4


class FakeClock:
    """Clock returning a fixed instant until advanced."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class RecordingNotifier:
    """Notifier that keeps every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, dict[str, Any]]] = []

    async def send(
        self, to_email: str, template_id: str, variables: Mapping[str, Any]
    ) -> None:
        self.sent.append((to_email, template_id, dict(variables)))

    @property
    def last_code(self) -> str:
        return self.sent[-1][2]["activation_code"]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_secrets() -> TokenSecrets:
    return TokenSecrets(
        activation="test-activation-secret",
        access="test-access-secret",
        refresh="test-refresh-secret",
    )


@pytest.fixture
def issuer(clock: FakeClock) -> TokenIssuer:
    return TokenIssuer(clock=clock)


@pytest.fixture
def hasher() -> CredentialHasher:
    return CredentialHasher(cost=TEST_BCRYPT_COST)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(
    repository: InMemoryAccountRepository,
    notifier: RecordingNotifier,
    token_secrets: TokenSecrets,
    hasher: CredentialHasher,
    issuer: TokenIssuer,
) -> AccountService:
    return AccountService(
        repository=repository,
        notifier=notifier,
        token_secrets=token_secrets,
        hasher=hasher,
        tokens=issuer,
        policy=TokenPolicy(),
    )


@pytest.fixture
def decode_unverified():
    """Read token claims without checking signature or expiry (test-only)."""

    def _decode(token: str) -> dict[str, Any]:
        return jwt.decode(token, options={"verify_signature": False})

    return _decode
