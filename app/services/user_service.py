"""User CRUD over the store. Every result is projected to UserPublic."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UserAlreadyExistsError
from app.models import User
from app.schemas.auth import UserPublic
from app.services.strategies import normalize_email

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_users(self) -> list[UserPublic]:
        users = self.db.query(User).order_by(User.id).all()
        return [UserPublic.model_validate(u) for u in users]

    def get_user(self, user_id: int) -> UserPublic | None:
        """Return the user's public view, or None if no such id."""
        user = self.db.get(User, user_id)
        return UserPublic.model_validate(user) if user is not None else None

    def update_user(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
    ) -> UserPublic:
        """
        Change name and/or email. Omitted or blank values are ignored.

        Raises NotFoundError for an unknown id and UserAlreadyExistsError when
        the new email belongs to another account.
        """
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError()

        if name is not None and name.strip():
            user.name = name.strip()
        if email is not None and email.strip():
            new_email = normalize_email(email)
            if new_email != user.email:
                taken = (
                    self.db.query(User.id)
                    .filter(User.email == new_email, User.id != user_id)
                    .first()
                )
                if taken is not None:
                    self.db.rollback()
                    raise UserAlreadyExistsError()
                user.email = new_email

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError() from e
        self.db.refresh(user)
        return UserPublic.model_validate(user)

    def delete_user(self, user_id: int) -> None:
        """Delete the user. Raises NotFoundError if the id does not exist."""
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError()
        self.db.delete(user)
        self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})
