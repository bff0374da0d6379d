from __future__ import annotations

from typing import Any, Dict, Optional

from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

USER_COLUMNS = "user_id, username, password_hash, role, full_name, email, branch, prn, year, created_at"


def row_to_user(r: Dict[str, Any], *, prefix: str = "") -> User:
    return User(
        user_id=int(r[f"{prefix}user_id"]),
        username=r[f"{prefix}username"],
        password_hash=r.get(f"{prefix}password_hash") or "",
        role=Role(r[f"{prefix}role"]),
        full_name=r[f"{prefix}full_name"],
        email=r[f"{prefix}email"],
        branch=r[f"{prefix}branch"],
        prn=r.get(f"{prefix}prn"),
        year=r.get(f"{prefix}year"),
        created_at=r.get(f"{prefix}created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, password_hash, role, full_name, email, branch, prn, year)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (username, password_hash, role.value, full_name, email, branch, prn, year),
                )
                cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE user_id=%s", (int(cur.lastrowid),))
                return row_to_user(fetchone(cur))
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ValidationError("Username already exists") from exc
            raise
