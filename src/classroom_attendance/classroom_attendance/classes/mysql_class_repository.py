from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import ClassRecord
from .repository import ClassCodeTakenError, ClassRepository

CLASS_COLUMNS = "class_id, name, description, class_code, password_hash, teacher_id, created_at"


def row_to_class(r: Dict[str, Any], *, prefix: str = "") -> ClassRecord:
    return ClassRecord(
        class_id=int(r[f"{prefix}class_id"]),
        name=r[f"{prefix}name"],
        description=r.get(f"{prefix}description"),
        class_code=r[f"{prefix}class_code"],
        password_hash=r.get(f"{prefix}password_hash") or "",
        teacher_id=int(r[f"{prefix}teacher_id"]),
        created_at=r.get(f"{prefix}created_at"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_class(
        self,
        *,
        name: str,
        description: Optional[str],
        class_code: str,
        password_hash: str,
        teacher_id: int,
    ) -> ClassRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO classes(name, description, class_code, password_hash, teacher_id)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (name, description, class_code, password_hash, int(teacher_id)),
                )
                cur.execute(f"SELECT {CLASS_COLUMNS} FROM classes WHERE class_id=%s", (int(cur.lastrowid),))
                return row_to_class(fetchone(cur))
        except IntegrityError as exc:
            if is_duplicate_key(exc, key="uq_classes_class_code"):
                raise ClassCodeTakenError(class_code) from exc
            raise

    def get_by_id(self, class_id: int) -> Optional[ClassRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {CLASS_COLUMNS} FROM classes WHERE class_id=%s", (int(class_id),))
            row = fetchone(cur)
            return row_to_class(row) if row else None

    def get_by_code(self, class_code: str) -> Optional[ClassRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {CLASS_COLUMNS} FROM classes WHERE class_code=%s", (class_code,))
            row = fetchone(cur)
            return row_to_class(row) if row else None

    def list_by_teacher(self, teacher_id: int) -> Sequence[ClassRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {CLASS_COLUMNS}
                FROM classes
                WHERE teacher_id=%s
                ORDER BY created_at DESC, class_id DESC
                """,
                (int(teacher_id),),
            )
            return [row_to_class(r) for r in fetchall(cur)]

    def delete_by_id(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
