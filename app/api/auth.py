"""Registration and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import get_auth_service
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserPublic
from app.services.auth_service import (
    AuthService,
    require_registration_fields,
    resolve_registration_role,
)

router = APIRouter()


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """
    Create an account. A masterKey matching MASTER_KEY makes it an ADMIN;
    a non-matching masterKey is rejected with 401 before anything is stored.
    Missing fields are reported (400) ahead of the masterKey check.
    """
    require_registration_fields(body.name, body.email, body.password)
    role = resolve_registration_role(body.master_key)
    return auth_service.register(body.name, body.email, body.password, role=role)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate and return {token, user}.
    Include the token in the Authorization header as: Bearer <token>
    """
    return auth_service.login(body.email, body.password, mode=body.mode)
