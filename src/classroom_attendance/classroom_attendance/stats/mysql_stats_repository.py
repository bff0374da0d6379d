from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ClassCounts
from .repository import StatsRepository


class MySQLStatsRepository(StatsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_class_counts(self, class_id: int) -> ClassCounts:
        class_id = int(class_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    (SELECT COUNT(*) FROM lectures WHERE class_id=%s) AS total_lectures,
                    (SELECT COUNT(*) FROM enrollments WHERE class_id=%s) AS total_students,
                    COUNT(CASE WHEN ar.status = 'present' THEN 1 END) AS total_present,
                    COUNT(ar.attendance_id) AS total_records
                FROM attendance_records ar
                JOIN lectures l ON l.lecture_id = ar.lecture_id
                WHERE l.class_id=%s
                """,
                (class_id, class_id, class_id),
            )
            r = fetchone(cur) or {}
            return ClassCounts(
                total_lectures=int(r.get("total_lectures") or 0),
                total_students=int(r.get("total_students") or 0),
                total_present=int(r.get("total_present") or 0),
                total_records=int(r.get("total_records") or 0),
            )
