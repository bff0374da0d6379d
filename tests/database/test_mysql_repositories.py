from __future__ import annotations

from datetime import datetime

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from classroom_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from classroom_attendance.classes.mysql_class_repository import MySQLClassRepository
from classroom_attendance.classes.repository import ClassCodeTakenError
from classroom_attendance.core.enums import AttendanceStatus
from classroom_attendance.core.exceptions import DuplicateEnrollmentError
from classroom_attendance.database.bootstrap import iter_sql_statements
from classroom_attendance.database.mysql_base import is_duplicate_key
from classroom_attendance.enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository


class FakeCursor:
    def __init__(self, *, raise_on_execute=None, rows=None):
        self.raise_on_execute = raise_on_execute
        self.rows = list(rows or [])
        self.executed = []
        self.lastrowid = 1
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self.raise_on_execute is not None:
            raise self.raise_on_execute

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None

    def fetchall(self):
        rows, self.rows = self.rows, []
        return rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, cursor: FakeCursor):
        self.connection = FakeConnection(cursor)

    def connect(self, *, with_database: bool = True):
        return self.connection


def _duplicate(key: str) -> IntegrityError:
    return IntegrityError(msg=f"Duplicate entry 'x' for key '{key}'", errno=errorcode.ER_DUP_ENTRY)


def test_is_duplicate_key_matches_errno_and_key():
    exc = _duplicate("enrollments.uq_enrollments_student_class")

    assert is_duplicate_key(exc)
    assert is_duplicate_key(exc, key="uq_enrollments_student_class")
    assert not is_duplicate_key(exc, key="uq_classes_class_code")
    assert not is_duplicate_key(IntegrityError(msg="fk", errno=errorcode.ER_NO_REFERENCED_ROW_2))
    assert not is_duplicate_key(ValueError("nope"))


def test_duplicate_enrollment_is_translated_and_rolled_back():
    factory = FakeFactory(FakeCursor(raise_on_execute=_duplicate("enrollments.uq_enrollments_student_class")))
    repo = MySQLEnrollmentRepository(factory)

    with pytest.raises(DuplicateEnrollmentError):
        repo.create_enrollment(student_id=1, class_id=2, enrolled_at=datetime(2026, 3, 1))

    assert factory.connection.rolled_back
    assert not factory.connection.committed
    assert factory.connection.closed


def test_taken_class_code_is_translated():
    factory = FakeFactory(FakeCursor(raise_on_execute=_duplicate("classes.uq_classes_class_code")))
    repo = MySQLClassRepository(factory)

    with pytest.raises(ClassCodeTakenError):
        repo.create_class(name="CS101", description=None, class_code="CS1000001", password_hash="h", teacher_id=1)


def test_other_integrity_errors_propagate():
    error = IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    repo = MySQLClassRepository(FakeFactory(FakeCursor(raise_on_execute=error)))

    with pytest.raises(IntegrityError):
        repo.create_class(name="CS101", description=None, class_code="CS1000001", password_hash="h", teacher_id=99)


def test_upsert_is_a_single_statement_and_reads_back():
    marked_at = datetime(2026, 3, 1, 10, 5)
    cursor = FakeCursor(
        rows=[{"attendance_id": 7, "lecture_id": 3, "student_id": 4, "status": "late", "marked_at": marked_at}]
    )
    factory = FakeFactory(cursor)

    record = MySQLAttendanceRepository(factory).upsert(
        lecture_id=3, student_id=4, status=AttendanceStatus.LATE, marked_at=marked_at
    )

    insert_sql, params = cursor.executed[0]
    assert "ON DUPLICATE KEY UPDATE" in insert_sql
    assert params == (3, 4, "late", marked_at)
    assert record.attendance_id == 7
    assert record.status == AttendanceStatus.LATE
    assert factory.connection.committed


def test_iter_sql_statements_respects_quotes():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('semi;colon');\n\n  ;SELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('semi;colon')",
        "SELECT 1",
    ]


def test_create_enrollment_returns_stored_row():
    stored_at = datetime(2026, 3, 1, 10, 0, 0)
    cursor = FakeCursor(rows=[{"enrollment_id": 1, "student_id": 4, "class_id": 2, "enrolled_at": stored_at}])
    factory = FakeFactory(cursor)

    enrollment = MySQLEnrollmentRepository(factory).create_enrollment(
        student_id=4, class_id=2, enrolled_at=datetime(2026, 3, 1, 10, 0, 0, 654321)
    )

    assert enrollment.enrolled_at == stored_at
    assert cursor.executed[1][0].startswith("SELECT")
    assert factory.connection.committed
