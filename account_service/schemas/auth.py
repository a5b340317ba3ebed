"""Authentication request/response schemas."""

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)

from account_service.schemas.user import UserRead


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    password_confirmation: str = Field(max_length=128)

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        """Reject a confirmation that differs from the password."""
        password = info.data.get("password")
        if password is not None and value != password:
            msg = "The password confirmation does not match."
            raise ValueError(msg)
        return value


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class AuthPayload(BaseModel):
    """``data`` payload returned by register and login."""

    user: UserRead
    token: str
