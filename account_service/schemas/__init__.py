"""Pydantic request/response schemas for API endpoints."""

from account_service.schemas.auth import AuthPayload, LoginRequest, RegisterRequest
from account_service.schemas.user import (
    UserCreate,
    UserEnvelope,
    UserPage,
    UserRead,
    UserUpdate,
)

__all__ = [
    # Auth
    "AuthPayload",
    "LoginRequest",
    "RegisterRequest",
    # Users
    "UserCreate",
    "UserEnvelope",
    "UserPage",
    "UserRead",
    "UserUpdate",
]
