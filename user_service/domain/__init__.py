"""
Domain layer - Account lifecycle logic with zero web-framework imports.

This package contains the registration state machine, credential hashing
and token issuance. It defines its own port interfaces for persistence and
notification, keeping infrastructure behind adapters.
"""

from .accounts import AccountService, TokenPolicy
from .contracts import RegisterCommand
from .credentials import CredentialHasher
from .exceptions import (
    AccountError,
    ConflictError,
    DeliveryError,
    InvalidActivationCodeError,
    InvalidTokenError,
    ValidationError,
)
from .models import Account, CurrentUser, LoginResult, NewAccount, SessionContext, TokenPair
from .ports import AccountRepository, NotificationTemplate, Notifier
from .tokens import TokenIssuer, TokenSecrets

__all__ = [
    "Account",
    "AccountError",
    "AccountRepository",
    "AccountService",
    "ConflictError",
    "CredentialHasher",
    "CurrentUser",
    "DeliveryError",
    "InvalidActivationCodeError",
    "InvalidTokenError",
    "LoginResult",
    "NewAccount",
    "NotificationTemplate",
    "Notifier",
    "RegisterCommand",
    "SessionContext",
    "TokenIssuer",
    "TokenPair",
    "TokenPolicy",
    "TokenSecrets",
    "ValidationError",
]
