"""Repository for the login attempt audit log.

Append and read only. There is no update or delete.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.models.login_attempt import LoginAttempt


class LoginAttemptRepository:
    """Stateless repository for LoginAttempt table operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        success: bool,
        ip_address: str | None = None,
    ) -> LoginAttempt:
        """Append one attempt record."""
        attempt = LoginAttempt(email=email, success=success, ip_address=ip_address)
        db.add(attempt)
        await db.flush()
        return attempt

    @staticmethod
    async def list_for_email(
        db: AsyncSession,
        email: str,
        *,
        limit: int = 100,
    ) -> list[LoginAttempt]:
        """Return attempts for an email, oldest first.

        Args:
            db: Async database session.
            email: Email exactly as it was submitted at login.
            limit: Maximum rows to return.

        Returns:
            List of LoginAttempt rows in insertion order.
        """
        stmt = (
            select(LoginAttempt)
            .where(LoginAttempt.email == email)
            .order_by(LoginAttempt.id)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
