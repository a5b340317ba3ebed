"""Repository for PersonalAccessToken operations.

Tokens are stored as keyed digests and looked up by digest. Rows are
immutable apart from last_used_at.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.models.personal_access_token import PersonalAccessToken


class TokenRepository:
    """Stateless repository for PersonalAccessToken table operations.

    All methods are static with no instance state.
    """

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        name: str,
        token_hash: str,
    ) -> PersonalAccessToken:
        """Store a new token digest.

        Args:
            db: Async database session.
            user_id: Owning user.
            name: Token label.
            token_hash: Keyed digest of the plaintext token.

        Returns:
            Created PersonalAccessToken.
        """
        token = PersonalAccessToken(user_id=user_id, name=name, token_hash=token_hash)
        db.add(token)
        await db.flush()
        await db.refresh(token)
        return token

    @staticmethod
    async def get_by_hash(
        db: AsyncSession, token_hash: str
    ) -> PersonalAccessToken | None:
        """Look up a token by digest.

        Args:
            db: Async database session.
            token_hash: Keyed digest of the presented token.

        Returns:
            PersonalAccessToken if found, None otherwise.
        """
        stmt = select(PersonalAccessToken).where(
            PersonalAccessToken.token_hash == token_hash
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def delete_by_hash(db: AsyncSession, token_hash: str) -> bool:
        """Delete the token matching a digest.

        Args:
            db: Async database session.
            token_hash: Keyed digest of the presented token.

        Returns:
            True if a row was deleted, False if none matched.
        """
        stmt = delete(PersonalAccessToken).where(
            PersonalAccessToken.token_hash == token_hash
        )
        result = await db.execute(stmt)
        row_count: int = result.rowcount  # type: ignore[attr-defined]
        return row_count > 0

    @staticmethod
    async def touch(db: AsyncSession, token_id: uuid.UUID) -> None:
        """Record that a token was just used.

        Args:
            db: Async database session.
            token_id: Token primary key.
        """
        stmt = (
            update(PersonalAccessToken)
            .where(PersonalAccessToken.id == token_id)
            .values(last_used_at=datetime.now(UTC))
        )
        await db.execute(stmt)

    @staticmethod
    async def count_for_user(db: AsyncSession, user_id: uuid.UUID) -> int:
        """Count live tokens owned by a user.

        Args:
            db: Async database session.
            user_id: Owning user.

        Returns:
            Number of tokens.
        """
        stmt = (
            select(func.count())
            .select_from(PersonalAccessToken)
            .where(PersonalAccessToken.user_id == user_id)
        )
        return (await db.scalar(stmt)) or 0
