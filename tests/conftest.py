from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from classroom_attendance.attendance.model import AttendanceRecord, LectureAttendanceRow, StudentAttendanceRow
from classroom_attendance.classes.model import ClassRecord
from classroom_attendance.classes.repository import ClassCodeTakenError
from classroom_attendance.container import wire_container
from classroom_attendance.core.actor import Actor
from classroom_attendance.core.enums import AttendanceStatus, Role
from classroom_attendance.core.exceptions import DuplicateEnrollmentError, ValidationError
from classroom_attendance.enrollments.model import Enrollment, EnrollmentWithClass, EnrollmentWithStudent
from classroom_attendance.lectures.model import Lecture
from classroom_attendance.main import create_app
from classroom_attendance.stats.model import ClassCounts
from classroom_attendance.users.model import User

PASSWORD = "secret123"


class TickingClock:
    """Returns start, start+step, start+2*step, ... on successive calls."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


class InMemoryDB:
    """Tables plus the unique and cascade rules the MySQL schema enforces."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.classes: dict[int, ClassRecord] = {}
        self.enrollments: dict[int, Enrollment] = {}
        self.lectures: dict[int, Lecture] = {}
        self.attendance: dict[int, AttendanceRecord] = {}
        self._ids: dict[str, int] = {}

    def next_id(self, table: str) -> int:
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    def delete_lecture(self, lecture_id: int) -> bool:
        if self.lectures.pop(lecture_id, None) is None:
            return False
        for aid in [a.attendance_id for a in self.attendance.values() if a.lecture_id == lecture_id]:
            del self.attendance[aid]
        return True

    def delete_class(self, class_id: int) -> bool:
        if self.classes.pop(class_id, None) is None:
            return False
        for lid in [l.lecture_id for l in self.lectures.values() if l.class_id == class_id]:
            self.delete_lecture(lid)
        for eid in [e.enrollment_id for e in self.enrollments.values() if e.class_id == class_id]:
            del self.enrollments[eid]
        return True


class InMemoryUsers:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._db.users.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._db.users.values() if u.username == username), None)

    def create_user(self, *, username, password_hash, role, full_name, email, branch, prn=None, year=None) -> User:
        if self.get_by_username(username):
            raise ValidationError("Username already exists")
        user = User(
            user_id=self._db.next_id("users"),
            username=username,
            password_hash=password_hash,
            role=role,
            full_name=full_name,
            email=email,
            branch=branch,
            prn=prn,
            year=year,
            created_at=datetime(2026, 1, 1, 8, 0, 0),
        )
        self._db.users[user.user_id] = user
        return user


class InMemoryClasses:
    def __init__(self, db: InMemoryDB):
        self._db = db
        self.attempted_codes: list[str] = []
        self.taken_codes: set[str] = set()

    def create_class(self, *, name, description, class_code, password_hash, teacher_id) -> ClassRecord:
        self.attempted_codes.append(class_code)
        if class_code in self.taken_codes or self.get_by_code(class_code):
            raise ClassCodeTakenError(class_code)
        record = ClassRecord(
            class_id=self._db.next_id("classes"),
            name=name,
            description=description,
            class_code=class_code,
            password_hash=password_hash,
            teacher_id=int(teacher_id),
            created_at=datetime(2026, 1, 1, 8, 0, 0),
        )
        self._db.classes[record.class_id] = record
        return record

    def get_by_id(self, class_id: int) -> Optional[ClassRecord]:
        return self._db.classes.get(int(class_id))

    def get_by_code(self, class_code: str) -> Optional[ClassRecord]:
        return next((c for c in self._db.classes.values() if c.class_code == class_code), None)

    def list_by_teacher(self, teacher_id: int):
        items = [c for c in self._db.classes.values() if c.teacher_id == int(teacher_id)]
        return sorted(items, key=lambda c: (c.created_at, c.class_id), reverse=True)

    def delete_by_id(self, class_id: int) -> bool:
        return self._db.delete_class(int(class_id))


class InMemoryEnrollments:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def create_enrollment(self, *, student_id, class_id, enrolled_at) -> Enrollment:
        # unique (student_id, class_id), checked against the table itself
        if any(
            e.student_id == int(student_id) and e.class_id == int(class_id) for e in self._db.enrollments.values()
        ):
            raise DuplicateEnrollmentError()
        enrollment = Enrollment(
            enrollment_id=self._db.next_id("enrollments"),
            student_id=int(student_id),
            class_id=int(class_id),
            enrolled_at=enrolled_at,
        )
        self._db.enrollments[enrollment.enrollment_id] = enrollment
        return enrollment

    def is_enrolled(self, student_id: int, class_id: int) -> bool:
        return any(
            e.student_id == int(student_id) and e.class_id == int(class_id) for e in self._db.enrollments.values()
        )

    def list_for_student(self, student_id: int):
        rows = [
            EnrollmentWithClass(enrollment=e, class_record=self._db.classes[e.class_id])
            for e in self._db.enrollments.values()
            if e.student_id == int(student_id) and e.class_id in self._db.classes
        ]
        return sorted(rows, key=lambda r: (r.enrollment.enrolled_at, r.enrollment.enrollment_id), reverse=True)

    def list_for_class(self, class_id: int):
        rows = [
            EnrollmentWithStudent(enrollment=e, student=self._db.users[e.student_id])
            for e in self._db.enrollments.values()
            if e.class_id == int(class_id) and e.student_id in self._db.users
        ]
        return sorted(rows, key=lambda r: (r.student.full_name, r.student.user_id))


class InMemoryLectures:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def create_lecture(self, *, class_id, title, date) -> Lecture:
        lecture = Lecture(
            lecture_id=self._db.next_id("lectures"),
            class_id=int(class_id),
            title=title,
            date=date,
            created_at=datetime(2026, 1, 1, 8, 0, 0),
        )
        self._db.lectures[lecture.lecture_id] = lecture
        return lecture

    def get_by_id(self, lecture_id: int) -> Optional[Lecture]:
        return self._db.lectures.get(int(lecture_id))

    def list_for_class(self, class_id: int):
        items = [l for l in self._db.lectures.values() if l.class_id == int(class_id)]
        return sorted(items, key=lambda l: (l.date, l.lecture_id), reverse=True)

    def delete_by_id(self, lecture_id: int) -> bool:
        return self._db.delete_lecture(int(lecture_id))


class InMemoryAttendance:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def upsert(self, *, lecture_id, student_id, status, marked_at) -> AttendanceRecord:
        existing = next(
            (
                a
                for a in self._db.attendance.values()
                if a.lecture_id == int(lecture_id) and a.student_id == int(student_id)
            ),
            None,
        )
        if existing:
            record = replace(existing, status=status, marked_at=marked_at)
        else:
            record = AttendanceRecord(
                attendance_id=self._db.next_id("attendance"),
                lecture_id=int(lecture_id),
                student_id=int(student_id),
                status=status,
                marked_at=marked_at,
            )
        self._db.attendance[record.attendance_id] = record
        return record

    def list_for_lecture(self, lecture_id: int):
        rows = [
            LectureAttendanceRow(record=a, student=self._db.users[a.student_id])
            for a in self._db.attendance.values()
            if a.lecture_id == int(lecture_id)
        ]
        return sorted(rows, key=lambda r: (r.student.full_name, r.student.user_id))

    def list_for_student(self, student_id: int, class_id: Optional[int] = None):
        rows = []
        for a in self._db.attendance.values():
            if a.student_id != int(student_id):
                continue
            lecture = self._db.lectures[a.lecture_id]
            if class_id is not None and lecture.class_id != int(class_id):
                continue
            rows.append(StudentAttendanceRow(record=a, lecture=lecture, class_record=self._db.classes[lecture.class_id]))
        return sorted(rows, key=lambda r: (r.lecture.date, r.lecture.lecture_id), reverse=True)


class InMemoryStats:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_class_counts(self, class_id: int) -> ClassCounts:
        lecture_ids = {l.lecture_id for l in self._db.lectures.values() if l.class_id == int(class_id)}
        records = [a for a in self._db.attendance.values() if a.lecture_id in lecture_ids]
        return ClassCounts(
            total_lectures=len(lecture_ids),
            total_students=sum(1 for e in self._db.enrollments.values() if e.class_id == int(class_id)),
            total_present=sum(1 for a in records if a.status == AttendanceStatus.PRESENT),
            total_records=len(records),
        )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    return TickingClock(fixed_now)


@pytest.fixture
def db() -> InMemoryDB:
    return InMemoryDB()


@pytest.fixture
def container(db, clock):
    return wire_container(
        users_repo=InMemoryUsers(db),
        classes_repo=InMemoryClasses(db),
        enrollments_repo=InMemoryEnrollments(db),
        lectures_repo=InMemoryLectures(db),
        attendance_repo=InMemoryAttendance(db),
        stats_repo=InMemoryStats(db),
        clock=clock,
    )


@pytest.fixture
def make_user(container):
    def _make(username: str, role: Role, full_name: Optional[str] = None) -> User:
        return container.users_repo.create_user(
            username=username,
            password_hash=generate_password_hash(PASSWORD),
            role=role,
            full_name=full_name or username.title(),
            email=f"{username}@example.com",
            branch="Computer Science",
            prn=f"{username}-0001" if role == Role.STUDENT else None,
            year="2" if role == Role.STUDENT else None,
        )

    return _make


def actor_for(user: User) -> Actor:
    return Actor(user_id=user.user_id, role=user.role)


@pytest.fixture
def teacher(make_user) -> User:
    return make_user("teacher", Role.TEACHER, "Tina Teacher")


@pytest.fixture
def alice(make_user) -> User:
    return make_user("alice", Role.STUDENT, "Alice Anders")


@pytest.fixture
def bob(make_user) -> User:
    return make_user("bob", Role.STUDENT, "Bob Brown")


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user: User):
        resp = client.post("/api/login", json={"username": user.username, "password": PASSWORD})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
