"""Authentication use cases: register, login, logout.

Composes the user repository, credential verifier, token issuer and login
attempt logger.

Invariants:
- register never creates an account for an email that is already taken
  (the UNIQUE constraint on users.email is the authority; the
  email_exists() check is the fast path)
- login records exactly one attempt per call, after the outcome is known
- login failures are indistinguishable for unknown email vs wrong password
- logout revokes only the presented token and reports failure as False
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.auth import validate_password
from account_service.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from account_service.models.user import User
from account_service.repositories.user_repository import UserRepository
from account_service.services.credential_verifier import CredentialVerifier
from account_service.services.login_attempt_logger import LoginAttemptLogger
from account_service.services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and logout.

    Args:
        db: Async database session.
        verifier: Credential verifier (defaults to one bound to db).
        issuer: Token issuer (defaults to one bound to db).
        attempt_logger: Login attempt sink (defaults to one bound to db).
    """

    def __init__(
        self,
        db: AsyncSession,
        *,
        verifier: CredentialVerifier | None = None,
        issuer: TokenIssuer | None = None,
        attempt_logger: LoginAttemptLogger | None = None,
    ) -> None:
        self._db = db
        self._verifier = verifier or CredentialVerifier(db)
        self._issuer = issuer or TokenIssuer(db)
        self._attempt_logger = attempt_logger or LoginAttemptLogger(db)

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and issue its first token.

        Args:
            name: Display name (non-empty).
            email: Email address, unique case-insensitively.
            password: Plaintext password (min length per settings).

        Returns:
            Tuple of (created user, plaintext token).

        Raises:
            ValidationError: If name or password break the field rules.
            DuplicateEmailError: If the email is already registered.
        """
        logger.info("Registration attempt for %s", email)

        if not name.strip():
            raise ValidationError.for_field("name", "The name field is required.")
        validate_password(password)

        if await UserRepository.email_exists(self._db, email):
            logger.warning("Registration rejected, email already in use: %s", email)
            raise DuplicateEmailError()

        try:
            user = await UserRepository.create(
                self._db, name=name.strip(), email=email, password=password
            )
        except IntegrityError as exc:
            # Lost the race against a concurrent registration
            await self._db.rollback()
            logger.warning("Registration rejected by unique constraint: %s", email)
            raise DuplicateEmailError() from exc

        token = await self._issuer.generate_token(user)
        logger.info("Registration succeeded for user %s", user.id)
        return user, token

    async def login(
        self,
        email: str,
        password: str,
        source_address: str | None = None,
    ) -> tuple[User, str]:
        """Verify credentials and issue a token.

        A failed attempt is committed before InvalidCredentialsError is
        raised, so the request-level rollback cannot erase it.

        Args:
            email: Submitted email.
            password: Submitted plaintext password.
            source_address: Client address for the audit log.

        Returns:
            Tuple of (authenticated user, plaintext token).

        Raises:
            InvalidCredentialsError: If the pair does not match an account.
        """
        logger.info("Login attempt for %s from %s", email, source_address or "unknown")

        if not await self._verifier.validate_credentials(email, password):
            await self._attempt_logger.log_attempt(email, False, source_address)
            await self._db.commit()
            raise InvalidCredentialsError()

        user = await UserRepository.get_by_email(self._db, email)
        if user is None:
            # Account deleted between verification and lookup
            await self._attempt_logger.log_attempt(email, False, source_address)
            await self._db.commit()
            raise InvalidCredentialsError()

        token = await self._issuer.generate_token(user)
        await self._attempt_logger.log_attempt(email, True, source_address)
        logger.info("Login succeeded for user %s", user.id)
        return user, token

    async def logout(self, user: User, presented_token: str) -> bool:
        """Revoke the token the caller authenticated with.

        Other tokens of the same user stay valid. Never raises.

        Args:
            user: Authenticated user.
            presented_token: Plaintext token from the current request.

        Returns:
            True if the token was revoked, False otherwise.
        """
        try:
            revoked = await self._issuer.revoke(presented_token)
        except Exception:
            logger.exception("Logout failed for user %s", user.id)
            return False

        if not revoked:
            logger.error("Logout failed for user %s: token already revoked", user.id)
            return False

        logger.info("Logout succeeded for user %s", user.id)
        return True
