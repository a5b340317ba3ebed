"""User request/response schemas.

UserRead is the only shape a user leaves the API in; it has no credential
fields. Request schemas use ConfigDict(extra="forbid") to reject
unexpected fields.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from account_service.core.responses import PaginationMeta


class UserRead(BaseModel):
    """Public view of a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    email_verified_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    """Request body for POST /users."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UserUpdate(BaseModel):
    """Request body for PUT /users/{id} and PUT /profile.

    Every field is optional; only supplied fields change.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1, max_length=128)

    def changes(self) -> dict[str, str]:
        """Supplied, non-null fields as keyword arguments for the service."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserEnvelope(BaseModel):
    """``data`` payload carrying a single user."""

    user: UserRead


class UserPage(BaseModel):
    """``data`` payload for GET /users."""

    users: list[UserRead]
    meta: PaginationMeta
