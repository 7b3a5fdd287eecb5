"""
Domain exceptions - Semantic error types for the account lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class ConflictError(AccountError):
    """Email or phone number already belongs to an account."""

    pass


class InvalidTokenError(AccountError):
    """Token signature is invalid, the token is malformed, or it has expired."""

    pass


class InvalidActivationCodeError(AccountError):
    """Supplied activation code does not match the one sent by email."""

    pass


class DeliveryError(AccountError):
    """Notification could not be delivered."""

    pass


class ValidationError(AccountError):
    """Required registration fields are missing."""

    pass
