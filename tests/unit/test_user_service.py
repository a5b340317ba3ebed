"""Tests for UserService."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.auth import PasswordHasher
from account_service.core.errors import (
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)
from account_service.core.pagination import PaginationParams
from account_service.services.user_service import UserService

_PASSWORD = "password123"  # nosec B105


class TestCrud:
    """Tests for create/get/list/delete."""

    async def test_create_and_get(self, db_session: AsyncSession):
        """A created user should be retrievable by id."""
        service = UserService(db_session)
        user = await service.create_user("Jane", "jane@example.com", _PASSWORD)
        assert (await service.get_user(user.id)).email == "jane@example.com"

    async def test_create_duplicate(self, db_session: AsyncSession):
        """Duplicate emails should be rejected."""
        service = UserService(db_session)
        await service.create_user("Jane", "jane@example.com", _PASSWORD)
        with pytest.raises(DuplicateEmailError):
            await service.create_user("Other", "JANE@example.com", _PASSWORD)

    async def test_get_missing(self, db_session: AsyncSession):
        """Unknown ids should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await UserService(db_session).get_user(uuid.uuid4())

    async def test_list_users(self, db_session: AsyncSession):
        """list_users should honor pagination."""
        service = UserService(db_session)
        for i in range(3):
            await service.create_user(f"User {i}", f"u{i}@example.com", _PASSWORD)

        users, total = await service.list_users(PaginationParams(page=2, per_page=2))

        assert total == 3
        assert len(users) == 1

    async def test_delete_user(self, db_session: AsyncSession):
        """Deleted users should no longer be found."""
        service = UserService(db_session)
        user = await service.create_user("Jane", "jane@example.com", _PASSWORD)
        await service.delete_user(user.id)
        with pytest.raises(NotFoundError):
            await service.get_user(user.id)

    async def test_delete_missing(self, db_session: AsyncSession):
        """Deleting an unknown id should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await UserService(db_session).delete_user(uuid.uuid4())


class TestUpdate:
    """Tests for update_user() and update_profile()."""

    async def test_partial_update(self, db_session: AsyncSession):
        """Only supplied fields should change."""
        service = UserService(db_session)
        user = await service.create_user("Jane", "jane@example.com", _PASSWORD)

        updated = await service.update_user(user.id, name="Janet")

        assert updated.name == "Janet"
        assert updated.email == "jane@example.com"

    async def test_keeping_own_email_is_allowed(self, db_session: AsyncSession):
        """Re-submitting the user's own email should not be a duplicate."""
        service = UserService(db_session)
        user = await service.create_user("Jane", "jane@example.com", _PASSWORD)
        updated = await service.update_profile(user, email="Jane@Example.com")
        assert updated.email == "jane@example.com"

    async def test_taking_another_email_is_rejected(self, db_session: AsyncSession):
        """Switching to another user's email should fail."""
        service = UserService(db_session)
        await service.create_user("Jane", "jane@example.com", _PASSWORD)
        bob = await service.create_user("Bob", "bob@example.com", _PASSWORD)
        with pytest.raises(DuplicateEmailError):
            await service.update_user(bob.id, email="jane@example.com")

    async def test_password_change(self, db_session: AsyncSession):
        """A new password should be hashed and verifiable."""
        service = UserService(db_session)
        user = await service.create_user("Jane", "jane@example.com", _PASSWORD)
        updated = await service.update_profile(user, password="another-pass")
        assert PasswordHasher().verify("another-pass", updated.password_hash)

    async def test_short_password_rejected(self, db_session: AsyncSession):
        """Password rules apply to updates too."""
        service = UserService(db_session)
        user = await service.create_user("Jane", "jane@example.com", _PASSWORD)
        with pytest.raises(ValidationError):
            await service.update_profile(user, password="short")

    async def test_update_missing_user(self, db_session: AsyncSession):
        """Updating an unknown id should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await UserService(db_session).update_user(uuid.uuid4(), name="X")
