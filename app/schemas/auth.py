"""Request/response schemas for auth and user endpoints."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Account roles; stored by value in users.role."""

    USER = "USER"
    ADMIN = "ADMIN"


class UserPublic(BaseModel):
    """Public view of a user: everything except the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class RegisterRequest(BaseModel):
    """Registration payload. Blank fields are rejected by the service with 400."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", max_length=255, description="Display name")
    email: str = Field(default="", max_length=255, description="Login email (case-insensitive)")
    password: str = Field(default="", max_length=128, description="Plain-text password")
    master_key: str | None = Field(
        default=None,
        alias="masterKey",
        description="Bootstrap secret; when it matches MASTER_KEY the account is ADMIN",
    )


class LoginRequest(BaseModel):
    """
    Credentials for login. mode='master' authenticates with the master key instead.

    No length caps: every rejected login must come back as a 401 from a strategy.
    """

    email: str = Field(default="", description="Email, or any label in master mode")
    password: str = Field(default="", description="Password or master key")
    mode: str | None = Field(default=None, description="'master' selects master-key login")


class LoginResponse(BaseModel):
    """Signed token plus the public view of the authenticated identity."""

    token: str = Field(..., description="JWT access token")
    user: UserPublic


class UserUpdateRequest(BaseModel):
    """Partial update; omitted or blank fields are left unchanged."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
