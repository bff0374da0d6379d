from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..classes.access import ClassAccess
from ..common.datetime_utils import now_local
from ..core.actor import Actor
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..enrollments.repository import EnrollmentRepository
from ..lectures.service import LectureService
from .model import AttendanceRecord, LectureAttendanceRow, StudentAttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: mark attendance (upsert) and read it back per lecture or per student."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        lectures: LectureService,
        enrollments: EnrollmentRepository,
        access: ClassAccess,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._lectures = lectures
        self._enrollments = enrollments
        self._access = access
        self._clock = clock

    def mark(self, actor: Actor, *, lecture_id: int, student_id: int, status: AttendanceStatus) -> AttendanceRecord:
        if not isinstance(status, AttendanceStatus):
            raise ValidationError("Invalid attendance status", errors=[{"field": "status", "message": "Invalid attendance status"}])

        lecture = self._lectures.require_lecture(lecture_id)
        self._access.require_owner(actor, lecture.class_id)

        # Only the class roster can be marked.
        if not self._enrollments.is_enrolled(int(student_id), lecture.class_id):
            raise ValidationError("Student is not enrolled in this class")

        record = self._attendance.upsert(
            lecture_id=lecture.lecture_id,
            student_id=int(student_id),
            status=status,
            marked_at=self._clock(),
        )
        logger.info(
            "Lecture %s: student %s marked %s by teacher %s",
            lecture.lecture_id, student_id, status.value, actor.user_id,
        )
        return record

    def for_lecture(self, actor: Actor, lecture_id: int) -> Sequence[LectureAttendanceRow]:
        lecture = self._lectures.require_lecture(lecture_id)
        self._access.require_member(actor, lecture.class_id)
        return self._attendance.list_for_lecture(lecture.lecture_id)

    def for_student(
        self,
        actor: Actor,
        student_id: int,
        class_id: Optional[int] = None,
    ) -> Sequence[StudentAttendanceRow]:
        student_id = int(student_id)
        if actor.is_student and actor.user_id != student_id:
            raise AuthorizationError("Forbidden")

        if actor.is_teacher and class_id is not None:
            self._access.require_owner(actor, class_id)

        rows = self._attendance.list_for_student(student_id, class_id)
        if actor.is_teacher:
            # Teachers only see what was recorded in their own classes.
            rows = [r for r in rows if r.class_record.teacher_id == actor.user_id]
        return rows
