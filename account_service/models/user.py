"""User model - account identity and credential hash.

Plain mapped record: no relationships. Tokens and login attempts are
reached through their own repositories.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from account_service.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User account.

    Attributes:
        id: UUID primary key.
        name: Display name.
        email: Unique email address, stored lowercase.
        password_hash: bcrypt hash. Never serialized.
        email_verified_at: Timestamp when email was verified. NULL = unverified.
        created_at: Account creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email_verified_at: Mapped[datetime | None] = mapped_column(
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"
