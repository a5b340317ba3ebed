"""Self-service profile endpoints for the authenticated user."""

from fastapi import APIRouter

from account_service.api.deps import CurrentUser, DbSession
from account_service.core.responses import DataResponse
from account_service.schemas.user import UserEnvelope, UserRead, UserUpdate
from account_service.services.user_service import UserService

router = APIRouter()


@router.get("")
async def show_profile(user: CurrentUser) -> DataResponse[UserEnvelope]:
    """Return the caller's own account."""
    return DataResponse(data=UserEnvelope(user=UserRead.model_validate(user)))


@router.put("")
async def update_profile(
    body: UserUpdate,
    user: CurrentUser,
    db: DbSession,
) -> DataResponse[UserEnvelope]:
    """Partially update the caller's own account."""
    updated = await UserService(db).update_profile(user, **body.changes())
    return DataResponse(
        message="Profile updated successfully",
        data=UserEnvelope(user=UserRead.model_validate(updated)),
    )
