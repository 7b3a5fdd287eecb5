"""
Account lifecycle service - registration, activation and sessions.

Registration State Machine
==========================

States:
- UNREGISTERED: No account and no live activation token
- PENDING_ACTIVATION: An activation token has been issued and is still valid
- ACTIVE: The account exists in the repository

Transitions:
    UNREGISTERED -> PENDING_ACTIVATION   (register)
    PENDING_ACTIVATION -> ACTIVE         (activate with the emailed code)
    PENDING_ACTIVATION -> UNREGISTERED   (activation token expires)

Nothing is stored for PENDING_ACTIVATION. The pending registration,
including the hashed password and the activation code, lives only inside
the signed activation token; losing the token means registering again.

Email and phone uniqueness is checked at register and again at activate,
because accounts may be created in between. The repository's unique
constraints remain the final arbiter and surface as ConflictError.
"""

import logging
import secrets
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

from .contracts import RegisterCommand
from .credentials import CredentialHasher
from .exceptions import ConflictError, InvalidActivationCodeError, InvalidTokenError
from .models import (
    Account,
    CurrentUser,
    LoginResult,
    PendingRegistration,
    SessionContext,
    TokenPair,
)
from .ports import AccountRepository, NotificationTemplate, Notifier
from .tokens import TokenIssuer, TokenSecrets

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "invalid email or password"
LOGOUT_MESSAGE = "Logged out successfully!"


@dataclass(frozen=True)
class TokenPolicy:
    """Lifetimes of the three token classes."""

    activation_ttl: timedelta = timedelta(minutes=5)
    access_ttl: timedelta | None = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=3)


@dataclass
class AccountService:
    """
    Domain service for the account lifecycle.

    Orchestrates the repository, notifier, hasher and token issuer.
    Holds no per-request state.
    """

    repository: AccountRepository
    notifier: Notifier
    token_secrets: TokenSecrets
    hasher: CredentialHasher
    tokens: TokenIssuer
    policy: TokenPolicy

    async def register(self, command: RegisterCommand) -> str:
        """
        Start a registration and email the activation code.

        Args:
            command: Validated registration fields

        Returns:
            Signed activation token (the code itself is only emailed)

        Raises:
            ConflictError: If the email or phone number is already taken
            DeliveryError: If the activation email could not be sent
        """
        email = self._normalize_email(command.email)
        logger.info("register requested for %s", email)
        await self._ensure_available(email, command.phone_number)

        pending = PendingRegistration(
            name=command.name,
            email=email,
            password=self.hasher.hash(command.password),
            phone_number=command.phone_number,
        )
        activation_code = self._generate_activation_code()
        activation_token = self.tokens.issue(
            {"user": pending.to_claims(), "activation_code": activation_code},
            self.token_secrets.activation,
            self.policy.activation_ttl,
        )

        await self.notifier.send(
            email,
            NotificationTemplate.ACTIVATION.value,
            {"name": pending.name, "activation_code": activation_code},
        )
        logger.info("activation email sent to %s", email)
        return activation_token

    async def activate(self, activation_token: str, activation_code: str) -> Account:
        """
        Turn a pending registration into an account.

        Args:
            activation_token: Token returned by register
            activation_code: 4-digit code received by email

        Returns:
            The newly created Account

        Raises:
            InvalidTokenError: If the token is forged, malformed or expired
            InvalidActivationCodeError: If the code does not match
            ConflictError: If the email or phone number was taken meanwhile
        """
        claims = self.tokens.verify(activation_token, self.token_secrets.activation)
        try:
            pending = PendingRegistration.from_claims(claims["user"])
            expected_code = str(claims["activation_code"])
        except (KeyError, TypeError) as exc:
            raise InvalidTokenError("Invalid or expired token") from exc

        if not secrets.compare_digest(expected_code.encode(), str(activation_code).encode()):
            logger.warning("activation code mismatch for %s", pending.email)
            raise InvalidActivationCodeError("Invalid activation code")

        await self._ensure_available(pending.email, pending.phone_number)
        account = await self.repository.create(pending.to_new_account())
        logger.info("account %s activated for %s", account.id, account.email)
        return account

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue an access/refresh token pair.

        A missing account and a wrong password produce the same soft
        failure; nothing is raised. Both run a bcrypt check, so response
        time does not reveal whether the email is registered.
        """
        normalized_email = self._normalize_email(email)
        logger.info("login requested for %s", normalized_email)
        account = await self.repository.find_by_email(normalized_email)
        digest = account.password if account is not None else self.hasher.dummy_digest()
        password_ok = self.hasher.verify(password, digest)
        if account is None or not password_ok:
            logger.warning("login rejected for %s", normalized_email)
            return LoginResult(
                account=None,
                access_token=None,
                refresh_token=None,
                error=LOGIN_FAILED_MESSAGE,
            )

        pair = self._issue_token_pair(account)
        return LoginResult(
            account=account,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a valid refresh token for a fresh token pair.

        Raises:
            InvalidTokenError: If the token is invalid or its account is gone
        """
        account = await self._account_from_token(refresh_token, self.token_secrets.refresh)
        logger.info("tokens refreshed for account %s", account.id)
        return self._issue_token_pair(account)

    async def authenticate(
        self, access_token: str | None, refresh_token: str | None = None
    ) -> SessionContext:
        """
        Build the session for a request from the tokens it carries.

        A valid access token wins. Otherwise a valid refresh token rotates
        the session onto a freshly issued pair.

        Raises:
            InvalidTokenError: If neither token authenticates an account
        """
        if access_token:
            try:
                account = await self._account_from_token(access_token, self.token_secrets.access)
            except InvalidTokenError:
                if not refresh_token:
                    raise
            else:
                return SessionContext(
                    user=account, access_token=access_token, refresh_token=refresh_token
                )

        if not refresh_token:
            raise InvalidTokenError("Please login to access this resource!")

        account = await self._account_from_token(refresh_token, self.token_secrets.refresh)
        pair = self._issue_token_pair(account)
        return SessionContext(
            user=account, access_token=pair.access_token, refresh_token=pair.refresh_token
        )

    async def logout(self, session: SessionContext) -> str:
        """Clear the session's identity and tokens. Idempotent."""
        if session.user is not None:
            logger.info("logout for account %s", session.user.id)
        session.clear()
        return LOGOUT_MESSAGE

    async def whoami(self, session: SessionContext) -> CurrentUser:
        """Project the authenticated session; performs no verification."""
        return CurrentUser(
            user=session.user,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
        )

    async def list_accounts(self) -> Sequence[Account]:
        """Return every account."""
        logger.info("listing accounts")
        return await self.repository.list_all()

    async def _ensure_available(self, email: str, phone_number: str) -> None:
        if await self.repository.find_by_email(email) is not None:
            logger.warning("email %s already registered", email)
            raise ConflictError(f"Email {email} already exists")
        if await self.repository.find_by_phone(phone_number) is not None:
            logger.warning("phone number %s already registered", phone_number)
            raise ConflictError(f"Phone number {phone_number} already exists")

    async def _account_from_token(self, token: str, secret: str) -> Account:
        claims = self.tokens.verify(token, secret)
        account_id = claims.get("id")
        account = await self.repository.find_by_id(account_id) if account_id else None
        if account is None:
            raise InvalidTokenError("Invalid or expired token")
        return account

    def _issue_token_pair(self, account: Account) -> TokenPair:
        claims = {"id": account.id}
        access_token = self.tokens.issue(
            claims, self.token_secrets.access, self.policy.access_ttl
        )
        refresh_token = self.tokens.issue(
            claims, self.token_secrets.refresh, self.policy.refresh_ttl
        )
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _generate_activation_code(self) -> str:
        """Uniform 4-digit code in 1000-9999 from a cryptographic source."""
        return str(1000 + secrets.randbelow(9000))
