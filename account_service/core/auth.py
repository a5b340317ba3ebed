"""Authentication primitives: password hashing, password rules, token digests.

Pipeline:
- validate_password: Format rules (length only, sync)
- PasswordHasher: bcrypt hash/verify, the single place plaintext passwords
  are turned into stored credentials
- hash_token: keyed digest used to store and look up bearer tokens
- dummy_hash: per-cost throwaway hash for user enumeration defense
"""

import functools
import hashlib
import hmac

import bcrypt

from account_service.core.config import settings
from account_service.core.errors import ValidationError

# bcrypt only reads the first 72 bytes of its input and newer releases
# reject longer input outright
MAX_PASSWORD_BYTES = 72

_DUMMY_PASSWORD = b"account-service-dummy-password"  # nosec B105


@functools.lru_cache(maxsize=8)
def dummy_hash(rounds: int) -> bytes:
    """bcrypt hash of a throwaway value at the given cost factor.

    Compared against on user-not-found so that path costs the same as a real
    check at the configured cost. Computed once per cost factor, on first use.
    """
    return bcrypt.hashpw(_DUMMY_PASSWORD, bcrypt.gensalt(rounds=rounds))


def validate_password(password: str, field: str = "password") -> None:
    """Validate a plaintext password against the length policy.

    Args:
        password: Plain-text password to validate.
        field: Field name used as the error key.

    Raises:
        ValidationError: If the password is too short or too long.
    """
    if len(password) < settings.password_min_length:
        raise ValidationError.for_field(
            field,
            f"The {field} must be at least {settings.password_min_length} characters.",
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError.for_field(
            field, f"The {field} must be at most {MAX_PASSWORD_BYTES} bytes."
        )


class PasswordHasher:
    """One-way salted password hashing (bcrypt).

    Args:
        rounds: bcrypt cost factor. None reads settings.bcrypt_rounds at
            call time so tests can lower it.
    """

    def __init__(self, rounds: int | None = None) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds if self._rounds is not None else settings.bcrypt_rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises:
            ValidationError: If the password exceeds the bcrypt input limit.
        """
        encoded = password.encode()
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError.for_field(
                "password", f"The password must be at most {MAX_PASSWORD_BYTES} bytes."
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Check a plaintext password against a stored hash.

        Always performs one bcrypt comparison, against dummy_hash(self.rounds)
        when no usable stored hash exists, so the call costs the same either way.
        """
        encoded = password.encode()[:MAX_PASSWORD_BYTES]
        if not password_hash or len(password.encode()) > MAX_PASSWORD_BYTES:
            bcrypt.checkpw(encoded, dummy_hash(self.rounds))
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode())
        except ValueError:
            # Corrupt or non-bcrypt value in the credential column
            return False


password_hasher = PasswordHasher()


def hash_token(plain_token: str) -> str:
    """Derive the stored identifier of a bearer token.

    HMAC-SHA256 keyed with TOKEN_SECRET, so a leaked table cannot be used
    to mint or verify tokens offline.

    Args:
        plain_token: Token string as presented by the client.

    Returns:
        64-char hex digest.
    """
    return hmac.new(
        settings.token_secret.get_secret_value().encode(),
        plain_token.encode(),
        hashlib.sha256,
    ).hexdigest()
