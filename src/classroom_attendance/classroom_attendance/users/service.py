from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository
from .schemas import RegisterPayload

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: register an account, authenticate (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, payload: RegisterPayload) -> User:
        if self._users.get_by_username(payload.username):
            raise ValidationError("Username already exists")

        user = self._users.create_user(
            username=payload.username,
            password_hash=generate_password_hash(payload.password),
            role=payload.role_enum,
            full_name=payload.full_name,
            email=payload.email,
            branch=payload.branch,
            prn=payload.prn,
            year=payload.year,
        )
        logger.info("Registered %s %s (id=%s)", user.role.value, user.username, user.user_id)
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.warning("Failed login for %s", username)
            raise AuthenticationError("Invalid username or password")
        return user


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
