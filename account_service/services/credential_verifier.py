"""Credential verification.

Checks a submitted (email, password) pair against the stored bcrypt hash.
Unknown emails and wrong passwords return the same False after the same
amount of bcrypt work.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.auth import PasswordHasher, password_hasher
from account_service.repositories.user_repository import UserRepository


class CredentialVerifier:
    """Verify email + password pairs.

    Args:
        db: Async database session.
        hasher: Password hashing collaborator.
    """

    def __init__(
        self, db: AsyncSession, hasher: PasswordHasher = password_hasher
    ) -> None:
        self._db = db
        self._hasher = hasher

    async def validate_credentials(self, email: str, password: str) -> bool:
        """Return True only when the password matches the account's hash.

        Security: when no account matches, the hasher still runs one bcrypt
        comparison against a dummy hash at the configured cost, so timing
        does not reveal whether the email exists.
        """
        user = await UserRepository.get_by_email(self._db, email)
        return self._hasher.verify(password, user.password_hash if user else None)
