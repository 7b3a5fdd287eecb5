"""
Domain models - Accounts, pending registrations and session values.

Plain dataclasses with no framework imports. Accounts are owned by the
repository; everything else is transient and lives for one request.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Account:
    """Persisted, activated user account."""

    id: str
    name: str
    email: str
    phone_number: str
    password: str  # bcrypt digest, never plaintext
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class NewAccount:
    """Fields required by the repository to create an account."""

    name: str
    email: str
    phone_number: str
    password: str


@dataclass(slots=True)
class PendingRegistration:
    """
    Registration awaiting activation.

    Never persisted: it travels only inside the signed activation token.
    """

    name: str
    email: str
    password: str
    phone_number: str

    def to_claims(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "PendingRegistration":
        return cls(
            name=claims["name"],
            email=claims["email"],
            password=claims["password"],
            phone_number=claims["phone_number"],
        )

    def to_new_account(self) -> NewAccount:
        return NewAccount(
            name=self.name,
            email=self.email,
            phone_number=self.phone_number,
            password=self.password,
        )


@dataclass(slots=True)
class TokenPair:
    """Access/refresh token pair issued at login or refresh."""

    access_token: str
    refresh_token: str


@dataclass(slots=True)
class LoginResult:
    """
    Outcome of a login attempt.

    Login failures are returned as data: account and tokens are None and
    ``error`` carries a generic message.
    """

    account: Account | None
    access_token: str | None
    refresh_token: str | None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class SessionContext:
    """Identity and tokens attached to a request by authentication."""

    user: Account | None = None
    access_token: str | None = None
    refresh_token: str | None = None

    def clear(self) -> None:
        self.user = None
        self.access_token = None
        self.refresh_token = None


@dataclass(slots=True)
class CurrentUser:
    """Projection returned by whoami."""

    user: Account | None
    access_token: str | None
    refresh_token: str | None
