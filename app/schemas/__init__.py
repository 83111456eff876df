"""Pydantic request/response schemas."""

from app.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    Role,
    UserPublic,
    UserUpdateRequest,
)

__all__ = [
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "Role",
    "UserPublic",
    "UserUpdateRequest",
]
