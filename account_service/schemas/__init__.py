"""Pydantic schemas for API requests and responses."""

from account_service.schemas.user import (
    MessageResponse,
    SigninBody,
    SigninResponse,
    SignupBody,
    SignupResponse,
    UpdateBody,
    UserListResponse,
    UserResponse,
)

__all__ = [
    "SignupBody",
    "SigninBody",
    "UpdateBody",
    "UserResponse",
    "SignupResponse",
    "SigninResponse",
    "MessageResponse",
    "UserListResponse",
]
