"""Bearer-token authentication and role gates shared by the routers."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import ForbiddenError, UnauthenticatedError
from app.schemas.auth import Role, UserPublic
from app.services.auth_service import AuthService
from app.services.user_service import UserService

# auto_error=False: a missing header becomes our own 401 with an {error} body
security = HTTPBearer(auto_error=False)

DbSession = Annotated[Session, Depends(get_db)]


def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(db)


def get_user_service(db: DbSession) -> UserService:
    return UserService(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """Dependency: require a valid Bearer JWT and return the user as currently stored. Raises 401."""
    if credentials is None:
        raise UnauthenticatedError("Token not provided")
    if credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthenticatedError("Invalid token")
    user = auth_service.validate_token(credentials.credentials)
    if user is None:
        raise UnauthenticatedError("Invalid or expired token")
    return user


CurrentUser = Annotated[UserPublic, Depends(get_current_user)]


def ensure_role(user: UserPublic | None, required_role: Role) -> UserPublic:
    """Raise 401 if no user was resolved, 403 if the user's role is not required_role."""
    if user is None:
        raise UnauthenticatedError()
    if user.role != required_role:
        raise ForbiddenError()
    return user


def ensure_self_or_admin(user: UserPublic, target_id: int) -> None:
    """Raise 403 unless the user is an admin or is acting on their own record."""
    if user.role != Role.ADMIN and user.id != target_id:
        raise ForbiddenError("Permission denied")


def require_role(role: Role) -> Callable[[UserPublic], UserPublic]:
    """Build a dependency that authenticates the caller and then checks their role."""

    def dependency(current_user: CurrentUser) -> UserPublic:
        return ensure_role(current_user, role)

    return dependency


require_admin = require_role(Role.ADMIN)
