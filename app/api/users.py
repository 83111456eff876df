"""User resource: admin listing and deletion, self-or-admin read and update."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import (
    CurrentUser,
    ensure_self_or_admin,
    get_user_service,
    require_admin,
)
from app.core.errors import NotFoundError
from app.schemas.auth import UserPublic, UserUpdateRequest
from app.services.user_service import UserService

router = APIRouter()

Users = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserPublic])
def list_users(
    _admin: Annotated[UserPublic, Depends(require_admin)],
    users: Users,
) -> list[UserPublic]:
    """List all users (admin only)."""
    return users.list_users()


@router.get("/me", response_model=UserPublic)
def get_me(current_user: CurrentUser) -> UserPublic:
    """Profile of the caller, as currently stored."""
    return current_user


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: int, current_user: CurrentUser, users: Users) -> UserPublic:
    ensure_self_or_admin(current_user, user_id)
    user = users.get_user(user_id)
    if user is None:
        raise NotFoundError()
    return user


@router.put("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    current_user: CurrentUser,
    users: Users,
) -> UserPublic:
    """Update name and/or email (owner or admin)."""
    ensure_self_or_admin(current_user, user_id)
    return users.update_user(user_id, name=body.name, email=body.email)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: Annotated[UserPublic, Depends(require_admin)],
    users: Users,
) -> Response:
    """Delete a user (admin only). Outstanding tokens for that user stop validating."""
    users.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
