from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Sequence

from mysql.connector.errors import IntegrityError

from ..classes.mysql_class_repository import row_to_class
from ..core.exceptions import DuplicateEnrollmentError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..users.mysql_user_repository import row_to_user
from .model import Enrollment, EnrollmentWithClass, EnrollmentWithStudent
from .repository import EnrollmentRepository


def row_to_enrollment(r: Dict[str, Any]) -> Enrollment:
    return Enrollment(
        enrollment_id=int(r["enrollment_id"]),
        student_id=int(r["student_id"]),
        class_id=int(r["class_id"]),
        enrolled_at=r.get("enrolled_at"),
    )


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_enrollment(self, *, student_id: int, class_id: int, enrolled_at: datetime) -> Enrollment:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO enrollments(student_id, class_id, enrolled_at) VALUES(%s,%s,%s)",
                    (int(student_id), int(class_id), enrolled_at),
                )
                # DATETIME keeps whole seconds; return what was stored.
                cur.execute(
                    "SELECT enrollment_id, student_id, class_id, enrolled_at FROM enrollments WHERE enrollment_id=%s",
                    (int(cur.lastrowid),),
                )
                return row_to_enrollment(fetchone(cur))
        except IntegrityError as exc:
            if is_duplicate_key(exc, key="uq_enrollments_student_class"):
                raise DuplicateEnrollmentError() from exc
            raise

    def is_enrolled(self, student_id: int, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM enrollments WHERE student_id=%s AND class_id=%s",
                (int(student_id), int(class_id)),
            )
            return fetchone(cur) is not None

    def list_for_student(self, student_id: int) -> Sequence[EnrollmentWithClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.enrollment_id, e.student_id, e.class_id, e.enrolled_at,
                    c.class_id AS c_class_id, c.name AS c_name, c.description AS c_description,
                    c.class_code AS c_class_code, c.teacher_id AS c_teacher_id, c.created_at AS c_created_at
                FROM enrollments e
                JOIN classes c ON c.class_id = e.class_id
                WHERE e.student_id=%s
                ORDER BY e.enrolled_at DESC, e.enrollment_id DESC
                """,
                (int(student_id),),
            )
            return [
                EnrollmentWithClass(enrollment=row_to_enrollment(r), class_record=row_to_class(r, prefix="c_"))
                for r in fetchall(cur)
            ]

    def list_for_class(self, class_id: int) -> Sequence[EnrollmentWithStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.enrollment_id, e.student_id, e.class_id, e.enrolled_at,
                    u.user_id AS u_user_id, u.username AS u_username, u.role AS u_role,
                    u.full_name AS u_full_name, u.email AS u_email, u.branch AS u_branch,
                    u.prn AS u_prn, u.year AS u_year, u.created_at AS u_created_at
                FROM enrollments e
                JOIN users u ON u.user_id = e.student_id
                WHERE e.class_id=%s
                ORDER BY u.full_name ASC, u.user_id ASC
                """,
                (int(class_id),),
            )
            return [
                EnrollmentWithStudent(enrollment=row_to_enrollment(r), student=row_to_user(r, prefix="u_"))
                for r in fetchall(cur)
            ]
