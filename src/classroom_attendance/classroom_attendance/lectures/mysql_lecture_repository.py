from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Lecture
from .repository import LectureRepository

LECTURE_COLUMNS = "lecture_id, class_id, title, date, created_at"


def row_to_lecture(r: Dict[str, Any], *, prefix: str = "") -> Lecture:
    return Lecture(
        lecture_id=int(r[f"{prefix}lecture_id"]),
        class_id=int(r[f"{prefix}class_id"]),
        title=r[f"{prefix}title"],
        date=r[f"{prefix}date"],
        created_at=r.get(f"{prefix}created_at"),
    )


class MySQLLectureRepository(LectureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_lecture(self, *, class_id: int, title: str, date: datetime) -> Lecture:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO lectures(class_id, title, date) VALUES(%s,%s,%s)",
                (int(class_id), title, date),
            )
            cur.execute(f"SELECT {LECTURE_COLUMNS} FROM lectures WHERE lecture_id=%s", (int(cur.lastrowid),))
            return row_to_lecture(fetchone(cur))

    def get_by_id(self, lecture_id: int) -> Optional[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {LECTURE_COLUMNS} FROM lectures WHERE lecture_id=%s", (int(lecture_id),))
            row = fetchone(cur)
            return row_to_lecture(row) if row else None

    def list_for_class(self, class_id: int) -> Sequence[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {LECTURE_COLUMNS}
                FROM lectures
                WHERE class_id=%s
                ORDER BY date DESC, lecture_id DESC
                """,
                (int(class_id),),
            )
            return [row_to_lecture(r) for r in fetchall(cur)]

    def delete_by_id(self, lecture_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM lectures WHERE lecture_id=%s", (int(lecture_id),))
            return cur.rowcount > 0
