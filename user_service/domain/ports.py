"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Protocol

from .models import Account, NewAccount


class NotificationTemplate(str, Enum):
    """Templates the notifier knows how to deliver."""

    ACTIVATION = "activation-mail"


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    async def find_by_email(self, email: str) -> Account | None:
        """Return the account registered with ``email`` or None."""
        ...

    async def find_by_phone(self, phone_number: str) -> Account | None:
        """Return the account registered with ``phone_number`` or None."""
        ...

    async def find_by_id(self, account_id: str) -> Account | None:
        """Return the account with identifier ``account_id`` or None."""
        ...

    async def create(self, account: NewAccount) -> Account:
        """
        Persist a new account.

        The store's unique constraints on email and phone number are the
        final arbiter: a violation must be raised as ConflictError.

        Args:
            account: Fields of the account, password already hashed

        Returns:
            The created Account with its generated identifier

        Raises:
            ConflictError: If email or phone number is already taken
        """
        ...

    async def list_all(self) -> Sequence[Account]:
        """Return every account, unfiltered and unpaginated."""
        ...


class Notifier(Protocol):
    """Port interface for outbound notifications."""

    async def send(
        self, to_email: str, template_id: str, variables: Mapping[str, Any]
    ) -> None:
        """
        Deliver a templated notification.

        Args:
            to_email: Recipient email address
            template_id: Identifier of the message template
            variables: Values substituted into the template

        Raises:
            DeliveryError: If the message could not be delivered
        """
        ...
