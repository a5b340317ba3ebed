"""Repository for User CRUD operations.

Provides database access for the users table. create() and update() are
the only places a plaintext password reaches storage logic; each hashes it
exactly once through the PasswordHasher.
"""

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.auth import PasswordHasher, password_hasher
from account_service.models.personal_access_token import PersonalAccessToken
from account_service.models.user import User

logger = logging.getLogger(__name__)

# Fields that may be updated via UserRepository.update().
# Security: Never add 'id', 'password_hash', 'created_at', or 'updated_at'.
# - id: primary key, immutable
# - password_hash: only derived from the plaintext 'password' argument
# - created_at/updated_at: server-managed timestamps
_UPDATABLE_FIELDS: frozenset[str] = frozenset({"name", "email", "password"})


def normalize_email(email: str) -> str:
    """Canonical stored form of an email address."""
    return email.strip().lower()


class UserRepository:
    """Stateless repository for User table operations.

    All methods are static with no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: uuid.UUID) -> User | None:
        """Fetch a user by primary key.

        Args:
            db: Async database session.
            user_id: UUID primary key.

        Returns:
            User if found, None otherwise.
        """
        return await db.get(User, user_id)

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """Fetch a user by email address (case-insensitive).

        Args:
            db: Async database session.
            email: Email address to look up.

        Returns:
            User if found, None otherwise.
        """
        stmt = select(User).where(User.email == normalize_email(email))
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(
        db: AsyncSession,
        email: str,
        *,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        """Check whether an email is taken (case-insensitive).

        Args:
            db: Async database session.
            email: Email address to check.
            exclude_id: User whose own email should not count (updates).

        Returns:
            True if another user holds the email.
        """
        stmt = select(User.id).where(User.email == normalize_email(email))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def list_page(
        db: AsyncSession,
        *,
        offset: int,
        limit: int,
    ) -> tuple[list[User], int]:
        """Fetch one page of users ordered by creation.

        Args:
            db: Async database session.
            offset: Rows to skip.
            limit: Maximum rows to return.

        Returns:
            Tuple of (users on this page, total user count).
        """
        total = await db.scalar(select(func.count()).select_from(User))
        stmt = (
            select(User)
            .order_by(User.created_at, User.id)
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all()), total or 0

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        email: str,
        password: str,
        hasher: PasswordHasher = password_hasher,
    ) -> User:
        """Create a new user.

        Email is normalized to lowercase before storage. The password is
        hashed here and nowhere else.

        Args:
            db: Async database session.
            name: Display name.
            email: User email address.
            password: Plaintext password.
            hasher: Password hashing collaborator.

        Returns:
            Created User with database-generated fields populated.

        Raises:
            sqlalchemy.exc.IntegrityError: If email already exists.
        """
        logger.info("Creating user account")
        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=hasher.hash(password),
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    @staticmethod
    async def update(
        db: AsyncSession,
        user: User,
        *,
        hasher: PasswordHasher = password_hasher,
        **fields: str,
    ) -> User:
        """Update user fields.

        Only fields in _UPDATABLE_FIELDS are allowed. A ``password`` value is
        hashed before it is stored in ``password_hash``.

        Args:
            db: Async database session.
            user: User to update.
            hasher: Password hashing collaborator.
            **fields: Field names and values to update.

        Returns:
            Updated User, refreshed from the database.

        Raises:
            ValueError: If an unknown field name is passed.
            sqlalchemy.exc.IntegrityError: If the new email already exists.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        logger.info("Updating user %s", user.id)
        if "name" in fields:
            user.name = fields["name"]
        if "email" in fields:
            user.email = normalize_email(fields["email"])
        if "password" in fields:
            user.password_hash = hasher.hash(fields["password"])

        await db.flush()
        await db.refresh(user)
        return user

    @staticmethod
    async def delete(db: AsyncSession, user: User) -> None:
        """Delete a user and every token they own.

        Tokens are removed with an explicit statement rather than relying on
        the database cascade, which SQLite only honors with foreign keys on.

        Args:
            db: Async database session.
            user: User to delete.
        """
        logger.info("Deleting user %s", user.id)
        await db.execute(
            delete(PersonalAccessToken).where(PersonalAccessToken.user_id == user.id)
        )
        await db.delete(user)
        await db.flush()
