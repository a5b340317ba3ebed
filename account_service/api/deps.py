"""Shared dependencies for API endpoints.

Bearer token authentication: every protected endpoint receives the
resolved AuthContext (user + token row) explicitly through FastAPI
dependency injection.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.database import get_db
from account_service.core.errors import UnauthorizedError
from account_service.models.user import User
from account_service.services.token_issuer import AuthContext, TokenIssuer

# auto_error=False so a missing header goes through the same 401 envelope
# as an unknown token instead of FastAPI's default 403.
_bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_context(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)
    ],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthContext:
    """Resolve the bearer token on the request.

    Args:
        credentials: Parsed Authorization header, if present.
        db: Database session (injected).

    Returns:
        AuthContext for the token's owner.

    Raises:
        UnauthorizedError: If the header is missing or the token is unknown.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    context = await TokenIssuer(db).authenticate(credentials.credentials)
    if context is None:
        raise UnauthorizedError()
    return context


async def get_current_user(
    context: Annotated[AuthContext, Depends(get_auth_context)],
) -> User:
    """Return the user behind the presented bearer token."""
    return context.user


# Type aliases for cleaner endpoint signatures
CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
