"""Login attempt audit sink.

Records every login attempt as a durable row and as a structured log
event. Purely observational: nothing reads these records on the login
path, and a failure to record never reaches the caller.
"""

import logging

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.repositories.login_attempt_repository import (
    LoginAttemptRepository,
)

logger = logging.getLogger(__name__)
audit_logger = structlog.get_logger("account_service.audit")


class LoginAttemptLogger:
    """Append login attempts to the audit log.

    Args:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def log_attempt(
        self,
        email: str,
        success: bool,
        source_address: str | None = None,
    ) -> None:
        """Record one attempt. Never raises.

        The insert runs inside a SAVEPOINT so a failed write is rolled back
        alone and the caller's transaction stays usable.

        Args:
            email: Email as submitted, stored unchanged.
            success: Whether the credentials were accepted.
            source_address: Client address, if known.
        """
        try:
            audit_logger.info(
                "login_attempt",
                email=email,
                success=success,
                ip_address=source_address or "unknown",
            )
        except Exception:
            logger.exception("Failed to emit login attempt event")

        try:
            async with self._db.begin_nested():
                await LoginAttemptRepository.create(
                    self._db,
                    email=email,
                    success=success,
                    ip_address=source_address,
                )
        except Exception:
            logger.exception("Failed to persist login attempt")
