from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        full_name: str,
        email: str,
        branch: str,
        prn: Optional[str] = None,
        year: Optional[str] = None,
    ) -> User:
        """Insert a user; raises ValidationError if the username is taken."""

        raise NotImplementedError
