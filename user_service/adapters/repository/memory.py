"""
In-memory repository adapter - Implements AccountRepository protocol.

Process-local storage for development and tests. Enforces the same
uniqueness rules as the Postgres schema.
"""

import uuid
from collections.abc import Sequence

from user_service.domain.exceptions import ConflictError
from user_service.domain.models import Account, NewAccount


class InMemoryAccountRepository:
    """
    Dictionary-backed account store keyed by account id.

    create() never awaits, so its check-then-insert cannot interleave
    with another coroutine.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    async def find_by_email(self, email: str) -> Account | None:
        return next((a for a in self._accounts.values() if a.email == email), None)

    async def find_by_phone(self, phone_number: str) -> Account | None:
        return next(
            (a for a in self._accounts.values() if a.phone_number == phone_number), None
        )

    async def find_by_id(self, account_id: str) -> Account | None:
        return self._accounts.get(account_id)

    async def create(self, account: NewAccount) -> Account:
        for existing in self._accounts.values():
            if existing.email == account.email:
                raise ConflictError("Account already exists (users_email_key)")
            if existing.phone_number == account.phone_number:
                raise ConflictError("Account already exists (users_phone_number_key)")
        created = Account(
            id=str(uuid.uuid4()),
            name=account.name,
            email=account.email,
            phone_number=account.phone_number,
            password=account.password,
        )
        self._accounts[created.id] = created
        return created

    async def list_all(self) -> Sequence[Account]:
        return list(self._accounts.values())
