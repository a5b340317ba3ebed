"""Login attempt model - append-only audit log.

Stores every login attempt, successful or not. The email is the raw
(lowercased) input, so attempts against unknown accounts are recorded too.
Never consulted on the login path.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from account_service.models.base import Base


class LoginAttempt(Base):
    """One login attempt.

    Attributes:
        id: Autoincrement primary key (preserves insertion order).
        email: Email as submitted.
        success: Whether the credentials were accepted.
        ip_address: Source address, if known (45 chars fits IPv6).
        attempted_at: When the attempt was recorded.
    """

    __tablename__ = "login_attempts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    attempted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<LoginAttempt {self.email} success={self.success}>"
