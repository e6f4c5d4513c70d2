# server/core/auth_service.py

import logging
from dataclasses import dataclass
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from server.core.exceptions import (
    ConflictError,
    InfrastructureError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from server.core.security import PasswordHasher, TokenIssuer
from server.models.user import User as UserModel


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredUser:
    user_id: str
    token: str


class AuthService:
    """
    Register and log in users against the credential store.

    Usernames are matched exactly (case-sensitive, untrimmed) on both
    paths. Each call is independent; the only shared state is the
    hasher and token issuer, both read-only.
    """

    def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenIssuer):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens

    def _find_user(self, username: str) -> UserModel | None:
        try:
            return self.db.query(UserModel).filter(UserModel.username == username).first()
        except SQLAlchemyError as e:
            raise InfrastructureError() from e

    def register(self, username: str | None, password: str | None) -> RegisteredUser:
        if not username or not password:
            raise ValidationError("Username and password are required")

        if self._find_user(username):
            raise ConflictError("Username already taken")

        new_user = UserModel(username=username, hashed_password=self.hasher.hash(password))
        try:
            self.db.add(new_user)
            # the id is read before commit expires the instance
            self.db.flush()
            user_id = new_user.id
            self.db.commit()
        except IntegrityError as e:
            # lost the race against a concurrent registration of the same name
            self.db.rollback()
            raise ConflictError("Username already taken") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise InfrastructureError() from e

        logger.info("Registered user %r with id %s", username, user_id)
        token = self.tokens.issue(user_id, username)
        return RegisteredUser(user_id=str(user_id), token=token)

    def login(self, username: str | None, password: str | None) -> str:
        if not username:
            raise ValidationError("Empty username")
        if not password:
            raise ValidationError("Empty password")

        user = self._find_user(username)
        if not user:
            logger.info("Login failed for %r: unknown user", username)
            raise NotFoundError("User not found")

        if not self.hasher.verify(password, user.hashed_password):
            logger.info("Login failed for %r: password mismatch", username)
            raise InvalidCredentialsError("Invalid password")

        return self.tokens.issue(user.id, user.username)

    def identify(self, token: str) -> dict:
        payload = self.tokens.decode(token)
        return {"id": payload["id"], "username": payload["username"]}
