"""User management and self-service profile updates.

Backs the /users and /profile endpoints. Field rules that Pydantic cannot
express (password byte length, email uniqueness) are enforced here and
surface as ValidationError.
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.auth import validate_password
from account_service.core.errors import (
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)
from account_service.core.pagination import PaginationParams
from account_service.models.user import User
from account_service.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """CRUD over user accounts.

    Args:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_users(self, pagination: PaginationParams) -> tuple[list[User], int]:
        """Return one page of users and the total count."""
        return await UserRepository.list_page(
            self._db, offset=pagination.offset, limit=pagination.limit
        )

    async def get_user(self, user_id: uuid.UUID) -> User:
        """Fetch a user or raise NotFoundError."""
        user = await UserRepository.get_by_id(self._db, user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Create a user without issuing a token.

        Raises:
            ValidationError: If the name or password is rejected.
            DuplicateEmailError: If the email is already registered.
        """
        if not name.strip():
            raise ValidationError.for_field("name", "The name field is required.")
        validate_password(password)

        if await UserRepository.email_exists(self._db, email):
            raise DuplicateEmailError()

        try:
            user = await UserRepository.create(
                self._db, name=name.strip(), email=email, password=password
            )
        except IntegrityError as exc:
            await self._db.rollback()
            raise DuplicateEmailError() from exc

        logger.info("Created user %s", user.id)
        return user

    async def update_user(self, user_id: uuid.UUID, **fields: str) -> User:
        """Apply a partial update to the user with the given id.

        Raises:
            NotFoundError: If no such user exists.
            ValidationError: If a supplied field is rejected.
            DuplicateEmailError: If the new email belongs to another user.
        """
        user = await self.get_user(user_id)
        return await self._apply_update(user, fields)

    async def delete_user(self, user_id: uuid.UUID) -> None:
        """Delete a user and revoke all of their tokens.

        Raises:
            NotFoundError: If no such user exists.
        """
        user = await self.get_user(user_id)
        await UserRepository.delete(self._db, user)
        logger.info("Deleted user %s", user_id)

    async def update_profile(self, user: User, **fields: str) -> User:
        """Apply a partial update to the authenticated user's own account."""
        return await self._apply_update(user, fields)

    async def _apply_update(self, user: User, fields: dict[str, str]) -> User:
        if not fields:
            return user

        if "name" in fields and not fields["name"].strip():
            raise ValidationError.for_field("name", "The name field is required.")
        if "password" in fields:
            validate_password(fields["password"])
        if "email" in fields and await UserRepository.email_exists(
            self._db, fields["email"], exclude_id=user.id
        ):
            raise DuplicateEmailError()

        if "name" in fields:
            fields = {**fields, "name": fields["name"].strip()}

        try:
            return await UserRepository.update(self._db, user, **fields)
        except IntegrityError as exc:
            await self._db.rollback()
            raise DuplicateEmailError() from exc
