"""Login strategies: email + password against the store, or the process-wide master key."""

import hmac
from enum import Enum
from typing import Protocol

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidCredentialsError, InvalidMasterKeyError
from app.core.security import create_access_token, verify_password
from app.models import User
from app.schemas.auth import LoginResponse, Role, UserPublic

# Identity synthesized for master-key logins; never persisted.
MASTER_USER_ID = 0
MASTER_USER_NAME = "Master"
MASTER_DEFAULT_EMAIL = "master"


class AuthMode(str, Enum):
    """Closed set of login methods, selected per request by the 'mode' field."""

    PASSWORD = "password"
    MASTER = "master"

    @classmethod
    def from_flag(cls, mode: str | None) -> "AuthMode":
        """'master' selects MASTER; anything else (including None) selects PASSWORD."""
        return cls.MASTER if mode == cls.MASTER.value else cls.PASSWORD


class AuthStrategy(Protocol):
    """Shared contract: authenticate(identifier, secret) -> token + public user, or raise."""

    def authenticate(self, db: Session, identifier: str, secret: str) -> LoginResponse:
        ...


def normalize_email(email: str) -> str:
    return email.strip().lower()


class PasswordStrategy:
    """Look up the user by email and compare the password with the stored bcrypt hash."""

    def authenticate(self, db: Session, identifier: str, secret: str) -> LoginResponse:
        email = normalize_email(identifier or "")
        user = db.query(User).filter(User.email == email).first() if email else None
        # Same error for unknown email and wrong password
        if user is None or not verify_password(secret or "", user.password_hash):
            raise InvalidCredentialsError()

        token = create_access_token(sub=user.id, email=user.email, role=user.role)
        return LoginResponse(token=token, user=UserPublic.model_validate(user))


class MasterKeyStrategy:
    """Grant an ADMIN session to whoever knows MASTER_KEY, without touching the store."""

    def authenticate(self, db: Session, identifier: str, secret: str) -> LoginResponse:
        master_key = settings.MASTER_KEY
        if master_key is None or not secret or not hmac.compare_digest(
            secret.encode("utf-8"), master_key.get_secret_value().encode("utf-8")
        ):
            raise InvalidMasterKeyError()

        email = identifier or MASTER_DEFAULT_EMAIL
        user = UserPublic(
            id=MASTER_USER_ID,
            name=MASTER_USER_NAME,
            email=email,
            role=Role.ADMIN,
        )
        token = create_access_token(sub=user.id, email=email, role=Role.ADMIN.value)
        return LoginResponse(token=token, user=user)


_STRATEGIES: dict[AuthMode, AuthStrategy] = {
    AuthMode.PASSWORD: PasswordStrategy(),
    AuthMode.MASTER: MasterKeyStrategy(),
}


def get_strategy(mode: AuthMode | str | None) -> AuthStrategy:
    """Return the stateless strategy for a mode flag. Pure lookup; nothing is stored."""
    if not isinstance(mode, AuthMode):
        mode = AuthMode.from_flag(mode)
    return _STRATEGIES[mode]
