"""Authentication endpoints: register, login, logout.

Register and login return the created/authenticated user with a fresh
plaintext bearer token. Logout revokes only the token the request was
authenticated with.
"""

from fastapi import APIRouter, Request

from account_service.api.deps import CurrentAuth, DbSession
from account_service.core.errors import RevocationError
from account_service.core.responses import DataResponse
from account_service.schemas.auth import AuthPayload, LoginRequest, RegisterRequest
from account_service.schemas.user import UserRead
from account_service.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, db: DbSession) -> DataResponse[AuthPayload]:
    """Create an account and issue its first token.

    Duplicate emails are reported as a 422 field error on ``email``.
    """
    user, token = await AuthService(db).register(body.name, body.email, body.password)
    return DataResponse(
        message="User created successfully",
        data=AuthPayload(user=UserRead.model_validate(user), token=token),
    )


@router.post("/login")
async def login(
    request: Request,
    body: LoginRequest,
    db: DbSession,
) -> DataResponse[AuthPayload]:
    """Exchange email + password for a new bearer token.

    Every call records one login attempt. Unknown email and wrong password
    both yield 401 "Invalid credentials".
    """
    source_address = request.client.host if request.client else None
    user, token = await AuthService(db).login(body.email, body.password, source_address)
    return DataResponse(
        message="Login successful",
        data=AuthPayload(user=UserRead.model_validate(user), token=token),
    )


@router.post("/logout")
async def logout(auth: CurrentAuth, db: DbSession) -> DataResponse[None]:
    """Revoke the bearer token used for this request."""
    if not await AuthService(db).logout(auth.user, auth.plain_token):
        raise RevocationError()
    return DataResponse(message="Logout successful")
