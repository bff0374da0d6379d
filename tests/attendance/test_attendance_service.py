from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from classroom_attendance.core.enums import AttendanceStatus, Role
from classroom_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError

from conftest import actor_for


@pytest.fixture
def course(container, teacher, alice, bob):
    record = container.class_service.create_class(actor_for(teacher), name="Databases", description=None, password="pw")
    container.enrollment_service.enroll(alice.user_id, record.class_id)
    container.enrollment_service.enroll(bob.user_id, record.class_id)
    return record


@pytest.fixture
def lecture(container, teacher, course):
    return container.lecture_service.create(
        actor_for(teacher), class_id=course.class_id, title="Normal forms", date=datetime(2026, 3, 1, 10, 0)
    )


def test_mark_twice_keeps_one_row_with_last_status(container, db, teacher, alice, lecture):
    t = actor_for(teacher)

    first = container.attendance_service.mark(
        t, lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.ABSENT
    )
    second = container.attendance_service.mark(
        t, lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.LATE
    )

    assert len(db.attendance) == 1
    assert second.attendance_id == first.attendance_id
    assert second.status == AttendanceStatus.LATE
    assert second.marked_at > first.marked_at


def test_mark_rejects_status_outside_enum(container, teacher, alice, lecture):
    with pytest.raises(ValidationError):
        container.attendance_service.mark(
            actor_for(teacher), lecture_id=lecture.lecture_id, student_id=alice.user_id, status="excused"
        )


def test_mark_requires_enrolled_student(container, teacher, lecture, make_user):
    outsider = make_user("carol", Role.STUDENT)

    with pytest.raises(ValidationError):
        container.attendance_service.mark(
            actor_for(teacher), lecture_id=lecture.lecture_id, student_id=outsider.user_id, status=AttendanceStatus.PRESENT
        )


def test_mark_requires_owner_teacher(container, alice, lecture, make_user):
    other = make_user("other", Role.TEACHER)

    with pytest.raises(AuthorizationError):
        container.attendance_service.mark(
            actor_for(other), lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.PRESENT
        )
    with pytest.raises(AuthorizationError):
        container.attendance_service.mark(
            actor_for(alice), lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.PRESENT
        )


def test_mark_unknown_lecture(container, teacher, alice):
    with pytest.raises(NotFoundError):
        container.attendance_service.mark(
            actor_for(teacher), lecture_id=404, student_id=alice.user_id, status=AttendanceStatus.PRESENT
        )


def test_for_lecture_joins_students(container, teacher, alice, bob, lecture):
    t = actor_for(teacher)
    container.attendance_service.mark(t, lecture_id=lecture.lecture_id, student_id=bob.user_id, status=AttendanceStatus.ABSENT)
    container.attendance_service.mark(t, lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.PRESENT)

    rows = container.attendance_service.for_lecture(t, lecture.lecture_id)

    assert [(r.student.username, r.record.status) for r in rows] == [
        ("alice", AttendanceStatus.PRESENT),
        ("bob", AttendanceStatus.ABSENT),
    ]
    # enrolled students may read the sheet too
    assert len(container.attendance_service.for_lecture(actor_for(alice), lecture.lecture_id)) == 2


def test_for_student_orders_by_lecture_date_and_filters_class(container, teacher, alice, course):
    t = actor_for(teacher)
    older = container.lecture_service.create(t, class_id=course.class_id, title="Intro", date=datetime(2026, 2, 1, 10, 0))
    newer = container.lecture_service.create(t, class_id=course.class_id, title="Joins", date=datetime(2026, 2, 15, 10, 0))
    other_class = container.class_service.create_class(t, name="Compilers", description=None, password="pw")
    container.enrollment_service.enroll(alice.user_id, other_class.class_id)
    other_lecture = container.lecture_service.create(
        t, class_id=other_class.class_id, title="Lexing", date=datetime(2026, 2, 20, 10, 0)
    )

    for lec in (older, newer, other_lecture):
        container.attendance_service.mark(t, lecture_id=lec.lecture_id, student_id=alice.user_id, status=AttendanceStatus.PRESENT)

    everything = container.attendance_service.for_student(actor_for(alice), alice.user_id)
    assert [r.lecture.title for r in everything] == ["Lexing", "Joins", "Intro"]

    only_course = container.attendance_service.for_student(actor_for(alice), alice.user_id, course.class_id)
    assert [r.lecture.title for r in only_course] == ["Joins", "Intro"]
    assert all(r.class_record.class_id == course.class_id for r in only_course)


def test_student_cannot_read_another_students_records(container, alice, bob):
    with pytest.raises(AuthorizationError):
        container.attendance_service.for_student(actor_for(alice), bob.user_id)


def test_teacher_sees_only_own_classes_records(container, teacher, alice, lecture, make_user):
    other = make_user("other", Role.TEACHER)
    o = actor_for(other)
    foreign = container.class_service.create_class(o, name="Ethics", description=None, password="pw")
    container.enrollment_service.enroll(alice.user_id, foreign.class_id)
    foreign_lecture = container.lecture_service.create(
        o, class_id=foreign.class_id, title="Trolley", date=lecture.date + timedelta(days=1)
    )
    container.attendance_service.mark(o, lecture_id=foreign_lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.LATE)
    container.attendance_service.mark(
        actor_for(teacher), lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.PRESENT
    )

    rows = container.attendance_service.for_student(actor_for(teacher), alice.user_id)

    assert [r.lecture.lecture_id for r in rows] == [lecture.lecture_id]
    with pytest.raises(AuthorizationError):
        container.attendance_service.for_student(actor_for(teacher), alice.user_id, foreign.class_id)


def test_deleting_lecture_removes_its_attendance(container, db, teacher, alice, lecture):
    t = actor_for(teacher)
    container.attendance_service.mark(t, lecture_id=lecture.lecture_id, student_id=alice.user_id, status=AttendanceStatus.PRESENT)

    container.lecture_service.delete(t, lecture.lecture_id)

    assert db.attendance == {}
    assert container.lecture_service.get(lecture.lecture_id) is None
