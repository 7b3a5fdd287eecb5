"""Unit tests for CredentialHasher."""

import re

import bcrypt

from user_service.domain.credentials import CredentialHasher


class TestHash:
    """Tests for password hashing."""

    def test_hash_is_not_plaintext(self, hasher: CredentialHasher) -> None:
        assert hasher.hash("password123") != "password123"

    def test_hash_is_bcrypt(self, hasher: CredentialHasher) -> None:
        """bcrypt hashes start with $2a$, $2b$, or $2y$."""
        assert re.match(r"^\$2[aby]\$", hasher.hash("password123"))

    def test_hash_is_salted(self, hasher: CredentialHasher) -> None:
        """Hashing the same password twice yields different digests."""
        assert hasher.hash("password123") != hasher.hash("password123")

    def test_default_cost_factor_is_10(self) -> None:
        """Default work factor matches the production setting."""
        digest = CredentialHasher().hash("password123")

        assert digest.split("$")[2] == "10"

    def test_configured_cost_factor_used(self) -> None:
        digest = CredentialHasher(cost=5).hash("password123")

        assert digest.split("$")[2] == "05"


class TestVerify:
    """Tests for password verification."""

    def test_verify_matching_password(self, hasher: CredentialHasher) -> None:
        digest = hasher.hash("password123")

        assert hasher.verify("password123", digest) is True

    def test_verify_wrong_password(self, hasher: CredentialHasher) -> None:
        digest = hasher.hash("password123")

        assert hasher.verify("wrong-password", digest) is False

    def test_verify_accepts_foreign_bcrypt_digest(self, hasher: CredentialHasher) -> None:
        """Digests created elsewhere with bcrypt verify too."""
        digest = bcrypt.hashpw(b"password123", bcrypt.gensalt(4)).decode()

        assert hasher.verify("password123", digest) is True

    def test_verify_malformed_digest_returns_false(self, hasher: CredentialHasher) -> None:
        """A malformed digest is a mismatch, not an error."""
        assert hasher.verify("password123", "not-a-bcrypt-hash") is False

    def test_verify_empty_digest_returns_false(self, hasher: CredentialHasher) -> None:
        assert hasher.verify("password123", "") is False

    def test_dummy_digest_uses_configured_cost(self, hasher: CredentialHasher) -> None:
        digest = hasher.dummy_digest()

        assert digest.startswith(f"$2b${hasher.cost:02d}$")
        assert hasher.dummy_digest() == digest
        assert hasher.verify("password123", digest) is False
