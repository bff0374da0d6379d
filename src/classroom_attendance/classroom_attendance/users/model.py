from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; role is fixed at registration.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    full_name: str
    email: str
    branch: str
    prn: Optional[str] = None
    year: Optional[str] = None
    created_at: Optional[datetime] = None

    def as_json(self) -> dict:
        # password_hash never leaves the server
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "fullName": self.full_name,
            "email": self.email,
            "branch": self.branch,
            "prn": self.prn,
            "year": self.year,
            "createdAt": to_iso(self.created_at),
        }
