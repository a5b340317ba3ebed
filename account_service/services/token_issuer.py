"""Bearer token issuance, resolution and revocation.

Tokens are random URL-safe strings. Only their HMAC digest is persisted,
so the plaintext returned by generate_token() can never be recovered from
storage. A user may hold any number of tokens at once.
"""

import logging
import secrets
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.auth import hash_token
from account_service.models.personal_access_token import PersonalAccessToken
from account_service.models.user import User
from account_service.repositories.token_repository import TokenRepository
from account_service.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# 40 random bytes -> 54 URL-safe characters
_TOKEN_BYTES = 40

DEFAULT_TOKEN_NAME = "auth_token"


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from a presented bearer token.

    Passed explicitly to every protected operation.

    Attributes:
        user: Authenticated user.
        token: Stored token row the request authenticated with.
        plain_token: Token string as presented, needed for logout.
    """

    user: User
    token: PersonalAccessToken
    plain_token: str


class TokenIssuer:
    """Mint, resolve and revoke bearer tokens.

    Args:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def generate_token(
        self, user: User, token_name: str = DEFAULT_TOKEN_NAME
    ) -> str:
        """Issue a new token for a user.

        Prior tokens stay valid.

        Args:
            user: Token owner.
            token_name: Session/device label.

        Returns:
            Plaintext token. This is the only time it is available.
        """
        plain_token = secrets.token_urlsafe(_TOKEN_BYTES)
        await TokenRepository.create(
            self._db,
            user_id=user.id,
            name=token_name,
            token_hash=hash_token(plain_token),
        )
        logger.info("Issued token '%s' for user %s", token_name, user.id)
        return plain_token

    async def revoke(self, presented_token: str) -> bool:
        """Delete the stored token matching a presented plaintext token.

        Returns:
            True if a token was deleted, False if none matched.
        """
        return await TokenRepository.delete_by_hash(
            self._db, hash_token(presented_token)
        )

    async def authenticate(self, presented_token: str) -> AuthContext | None:
        """Resolve a presented token to its user.

        Touches last_used_at on success.

        Returns:
            AuthContext, or None if the token is unknown or its user is gone.
        """
        token = await TokenRepository.get_by_hash(self._db, hash_token(presented_token))
        if token is None:
            return None

        user = await UserRepository.get_by_id(self._db, token.user_id)
        if user is None:
            return None

        await TokenRepository.touch(self._db, token.id)
        return AuthContext(user=user, token=token, plain_token=presented_token)
