"""Registration, login dispatch and bearer-token validation."""

import hmac
import logging

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    AuthError,
    InvalidInputError,
    InvalidMasterKeyError,
    UserAlreadyExistsError,
)
from app.core.security import decode_access_token, hash_password
from app.models import User
from app.schemas.auth import LoginResponse, Role, UserPublic
from app.services.strategies import AuthMode, get_strategy, normalize_email

logger = logging.getLogger(__name__)


def require_registration_fields(name: str | None, email: str | None, password: str | None) -> None:
    """Raise InvalidInputError unless name, email and password are all non-blank."""
    if not (name or "").strip() or not (email or "").strip() or not password:
        raise InvalidInputError()


def resolve_registration_role(master_key: str | None) -> Role:
    """
    Decide the role for a new account from the optional masterKey field.

    Missing or empty -> USER. Equal to MASTER_KEY -> ADMIN. Anything else
    raises InvalidMasterKeyError, also when no MASTER_KEY is configured.
    """
    if not master_key:
        return Role.USER
    configured = settings.MASTER_KEY
    if configured is not None and hmac.compare_digest(
        master_key.encode("utf-8"), configured.get_secret_value().encode("utf-8")
    ):
        return Role.ADMIN
    raise InvalidMasterKeyError()


class AuthService:
    """Auth operations over one request-scoped session. Holds no strategy state."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> UserPublic:
        """
        Create an account and return its public view.

        The role is trusted as given; callers decide escalation via
        resolve_registration_role before calling.
        """
        require_registration_fields(name, email, password)
        name = name.strip()
        email = normalize_email(email)

        if self.db.query(User.id).filter(User.email == email).first() is not None:
            raise UserAlreadyExistsError()

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role(role).value,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Concurrent registration won the unique index
            self.db.rollback()
            raise UserAlreadyExistsError() from e
        self.db.refresh(user)

        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return UserPublic.model_validate(user)

    def login(self, identifier: str, secret: str, mode: AuthMode | str | None = None) -> LoginResponse:
        """Authenticate with the strategy chosen by mode for this call only."""
        auth_mode = mode if isinstance(mode, AuthMode) else AuthMode.from_flag(mode)
        try:
            result = get_strategy(auth_mode).authenticate(self.db, identifier, secret)
        except AuthError as e:
            logger.warning(
                "Login failed",
                extra={"auth_mode": auth_mode.value, "reason": type(e).__name__},
            )
            raise
        logger.info(
            "Login succeeded",
            extra={"auth_mode": auth_mode.value, "user_id": result.user.id},
        )
        return result

    def validate_token(self, token: str) -> UserPublic | None:
        """
        Verify signature and expiry, then re-read the subject from the store.

        Returns the user's current public view, or None when the token is bad,
        has no usable subject, or the user no longer exists. Role and email
        embedded in the token are not used.
        """
        try:
            payload = decode_access_token(token)
        except jwt.PyJWTError:
            return None
        sub = payload.get("sub")
        if not sub:
            return None
        try:
            user_id = int(sub)
        except (TypeError, ValueError):
            return None
        if user_id <= 0:
            return None
        user = self.db.get(User, user_id)
        if user is None:
            return None
        return UserPublic.model_validate(user)
