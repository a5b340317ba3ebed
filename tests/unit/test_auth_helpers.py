"""Tests for authentication primitives.

Covers password length rules, bcrypt hashing/verification and the keyed
token digest.
"""

from unittest.mock import patch

import bcrypt
import pytest
from pydantic import SecretStr

from account_service.core.auth import (
    MAX_PASSWORD_BYTES,
    PasswordHasher,
    dummy_hash,
    hash_token,
    validate_password,
)
from account_service.core.config import settings
from account_service.core.errors import ValidationError

_PASSWORD = "password123"  # nosec B105


class TestValidatePassword:
    """Tests for validate_password()."""

    def test_accepts_minimum_length(self):
        """Eight characters should be accepted."""
        validate_password("a" * 8)

    def test_rejects_short_password(self):
        """Shorter than the minimum should raise a field error."""
        with pytest.raises(ValidationError) as exc_info:
            validate_password("short")
        assert exc_info.value.errors == {
            "password": ["The password must be at least 8 characters."]
        }

    def test_rejects_password_over_byte_limit(self):
        """Multi-byte passwords are measured in bytes, not characters."""
        # 37 chars x 2 bytes = 74 bytes
        with pytest.raises(ValidationError) as exc_info:
            validate_password("é" * 37)
        assert "password" in exc_info.value.errors

    def test_uses_custom_field_name(self):
        """Error key should follow the field argument."""
        with pytest.raises(ValidationError) as exc_info:
            validate_password("short", field="new_password")
        assert "new_password" in exc_info.value.errors


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_is_not_plaintext(self):
        """Stored form should never equal the input."""
        hashed = PasswordHasher().hash(_PASSWORD)
        assert hashed != _PASSWORD
        assert hashed.startswith("$2b$")

    def test_hash_is_salted(self):
        """Hashing the same password twice should give different hashes."""
        hasher = PasswordHasher()
        assert hasher.hash(_PASSWORD) != hasher.hash(_PASSWORD)

    def test_hash_uses_configured_rounds(self):
        """Explicit rounds should override settings."""
        hashed = PasswordHasher(rounds=5).hash(_PASSWORD)
        assert hashed.startswith("$2b$05$")

    def test_hash_rejects_over_limit_input(self):
        """Inputs past the bcrypt limit should be a validation error."""
        with pytest.raises(ValidationError):
            PasswordHasher().hash("a" * (MAX_PASSWORD_BYTES + 1))

    def test_verify_round_trip(self):
        """verify should accept the right password and reject others."""
        hasher = PasswordHasher()
        hashed = hasher.hash(_PASSWORD)
        assert hasher.verify(_PASSWORD, hashed) is True
        assert hasher.verify("wrong-password", hashed) is False

    def test_verify_without_hash_runs_dummy_compare(self):
        """A missing hash should still cost one bcrypt comparison."""
        with patch(
            "account_service.core.auth.bcrypt.checkpw", wraps=bcrypt.checkpw
        ) as checkpw:
            assert PasswordHasher().verify(_PASSWORD, None) is False
        checkpw.assert_called_once()
        assert checkpw.call_args.args[1] == dummy_hash(settings.bcrypt_rounds)

    def test_dummy_hash_follows_configured_rounds(self):
        """The not-found comparison should cost the same as a real one."""
        assert dummy_hash(4).startswith(b"$2b$04$")
        assert dummy_hash(6).startswith(b"$2b$06$")
        assert PasswordHasher(rounds=6).hash(_PASSWORD).startswith("$2b$06$")

    def test_dummy_hash_is_cached_per_cost(self):
        """Each cost factor should be hashed only once."""
        assert dummy_hash(5) is dummy_hash(5)

    def test_verify_rejects_corrupt_hash(self):
        """A non-bcrypt value in storage should verify as False."""
        assert PasswordHasher().verify(_PASSWORD, "not-a-bcrypt-hash") is False

    def test_verify_rejects_over_limit_input(self):
        """Over-limit input should be False, not an exception."""
        hashed = PasswordHasher().hash(_PASSWORD)
        assert PasswordHasher().verify("a" * 100, hashed) is False


class TestHashToken:
    """Tests for hash_token()."""

    def test_digest_is_hex_sha256(self):
        """Digest should be a 64-char hex string."""
        digest = hash_token("some-token")
        assert len(digest) == 64
        int(digest, 16)

    def test_digest_is_deterministic(self):
        """The same token should always map to the same digest."""
        assert hash_token("some-token") == hash_token("some-token")

    def test_different_tokens_differ(self):
        """Distinct tokens should not collide."""
        assert hash_token("token-a") != hash_token("token-b")

    def test_digest_depends_on_secret(self):
        """Changing TOKEN_SECRET should change every digest."""
        before = hash_token("some-token")
        original = settings.token_secret
        settings.token_secret = SecretStr("another-secret-value")
        try:
            assert hash_token("some-token") != before
        finally:
            settings.token_secret = original
