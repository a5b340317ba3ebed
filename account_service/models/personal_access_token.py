"""Personal access token model - opaque bearer tokens.

Only the keyed digest of a token is stored. The plaintext is handed to
the client once, at issuance.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from account_service.models.base import Base


class PersonalAccessToken(Base):
    """Bearer token bound to one user.

    Attributes:
        id: UUID primary key.
        user_id: Owning user.
        name: Logical session/device label (default "auth_token").
        token_hash: HMAC-SHA256 hex digest of the plaintext token.
        created_at: Issuance timestamp.
        last_used_at: Last time the token authenticated a request.
    """

    __tablename__ = "personal_access_tokens"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        nullable=True,
    )
