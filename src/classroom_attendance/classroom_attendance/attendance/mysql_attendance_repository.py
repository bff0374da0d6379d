from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..classes.mysql_class_repository import row_to_class
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..lectures.mysql_lecture_repository import row_to_lecture
from ..users.mysql_user_repository import row_to_user
from .model import AttendanceRecord, LectureAttendanceRow, StudentAttendanceRow
from .repository import AttendanceRepository

ATTENDANCE_COLUMNS = "attendance_id, lecture_id, student_id, status, marked_at"


def row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        lecture_id=int(r["lecture_id"]),
        student_id=int(r["student_id"]),
        status=AttendanceStatus(r["status"]),
        marked_at=r["marked_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        lecture_id: int,
        student_id: int,
        status: AttendanceStatus,
        marked_at: datetime,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(lecture_id, student_id, status, marked_at)
                VALUES(%s,%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE status=new.status, marked_at=new.marked_at
                """,
                (int(lecture_id), int(student_id), status.value, marked_at),
            )
            # Read back inside the same transaction: lastrowid is unreliable on the update path.
            cur.execute(
                f"SELECT {ATTENDANCE_COLUMNS} FROM attendance_records WHERE lecture_id=%s AND student_id=%s",
                (int(lecture_id), int(student_id)),
            )
            return row_to_record(fetchone(cur))

    def list_for_lecture(self, lecture_id: int) -> Sequence[LectureAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.attendance_id, ar.lecture_id, ar.student_id, ar.status, ar.marked_at,
                    u.user_id AS u_user_id, u.username AS u_username, u.role AS u_role,
                    u.full_name AS u_full_name, u.email AS u_email, u.branch AS u_branch,
                    u.prn AS u_prn, u.year AS u_year, u.created_at AS u_created_at
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.student_id
                WHERE ar.lecture_id=%s
                ORDER BY u.full_name ASC, u.user_id ASC
                """,
                (int(lecture_id),),
            )
            return [
                LectureAttendanceRow(record=row_to_record(r), student=row_to_user(r, prefix="u_"))
                for r in fetchall(cur)
            ]

    def list_for_student(self, student_id: int, class_id: Optional[int] = None) -> Sequence[StudentAttendanceRow]:
        clauses = ["ar.student_id=%s"]
        params: list[object] = [int(student_id)]

        if class_id is not None:
            clauses.append("c.class_id=%s")
            params.append(int(class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.attendance_id, ar.lecture_id, ar.student_id, ar.status, ar.marked_at,
                    l.lecture_id AS l_lecture_id, l.class_id AS l_class_id, l.title AS l_title,
                    l.date AS l_date, l.created_at AS l_created_at,
                    c.class_id AS c_class_id, c.name AS c_name, c.description AS c_description,
                    c.class_code AS c_class_code, c.teacher_id AS c_teacher_id, c.created_at AS c_created_at
                FROM attendance_records ar
                JOIN lectures l ON l.lecture_id = ar.lecture_id
                JOIN classes c ON c.class_id = l.class_id
                WHERE {where}
                ORDER BY l.date DESC, l.lecture_id DESC
                """,
                tuple(params),
            )
            return [
                StudentAttendanceRow(
                    record=row_to_record(r),
                    lecture=row_to_lecture(r, prefix="l_"),
                    class_record=row_to_class(r, prefix="c_"),
                )
                for r in fetchall(cur)
            ]
