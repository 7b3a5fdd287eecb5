"""Password hashing with bcrypt."""

from dataclasses import dataclass
from functools import lru_cache

import bcrypt


@lru_cache
def _dummy_digest(cost: int) -> str:
    # Checked in place of a missing account's digest
    return bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(rounds=cost)).decode()


@dataclass(frozen=True)
class CredentialHasher:
    """
    One-way salted password hashing.

    Verification relies on bcrypt's own constant-time comparison.
    """

    cost: int = 10

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds=self.cost)).decode()

    def verify(self, plaintext: str, digest: str) -> bool:
        """Return True when ``plaintext`` matches ``digest``; never raises."""
        try:
            return bcrypt.checkpw(plaintext.encode(), digest.encode())
        except ValueError:
            # Malformed or empty digest
            return False

    def dummy_digest(self) -> str:
        """Digest at this hasher's cost that no real password is checked against."""
        return _dummy_digest(self.cost)
