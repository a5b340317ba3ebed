"""User management endpoints.

All endpoints require a bearer token. Responses never include the
password hash.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends

from account_service.api.deps import CurrentUser, DbSession
from account_service.core.pagination import PaginationParams, pagination_params
from account_service.core.responses import DataResponse, PaginationMeta
from account_service.schemas.user import (
    UserCreate,
    UserEnvelope,
    UserPage,
    UserRead,
    UserUpdate,
)
from account_service.services.user_service import UserService

router = APIRouter()


@router.get("")
async def list_users(
    _user: CurrentUser,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
) -> DataResponse[UserPage]:
    """List users, oldest first."""
    users, total = await UserService(db).list_users(pagination)
    return DataResponse(
        data=UserPage(
            users=[UserRead.model_validate(u) for u in users],
            meta=PaginationMeta(
                total=total, page=pagination.page, per_page=pagination.per_page
            ),
        )
    )


@router.post("", status_code=201)
async def create_user(
    body: UserCreate,
    _user: CurrentUser,
    db: DbSession,
) -> DataResponse[UserEnvelope]:
    """Create a user. No token is issued for the new account."""
    user = await UserService(db).create_user(body.name, body.email, body.password)
    return DataResponse(
        message="User created successfully",
        data=UserEnvelope(user=UserRead.model_validate(user)),
    )


@router.get("/{user_id}")
async def show_user(
    user_id: uuid.UUID,
    _user: CurrentUser,
    db: DbSession,
) -> DataResponse[UserEnvelope]:
    """Fetch one user."""
    user = await UserService(db).get_user(user_id)
    return DataResponse(data=UserEnvelope(user=UserRead.model_validate(user)))


@router.put("/{user_id}")
async def update_user(
    user_id: uuid.UUID,
    body: UserUpdate,
    _user: CurrentUser,
    db: DbSession,
) -> DataResponse[UserEnvelope]:
    """Partially update a user."""
    user = await UserService(db).update_user(user_id, **body.changes())
    return DataResponse(
        message="User updated successfully",
        data=UserEnvelope(user=UserRead.model_validate(user)),
    )


@router.delete("/{user_id}")
async def delete_user(
    user_id: uuid.UUID,
    _user: CurrentUser,
    db: DbSession,
) -> DataResponse[None]:
    """Delete a user together with all of their tokens."""
    await UserService(db).delete_user(user_id)
    return DataResponse(message="User deleted successfully")
