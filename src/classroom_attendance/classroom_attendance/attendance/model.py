from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..classes.model import ClassRecord
from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceStatus
from ..lectures.model import Lecture
from ..users.model import User


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the single status of one student for one lecture."""

    attendance_id: int
    lecture_id: int
    student_id: int
    status: AttendanceStatus
    marked_at: datetime

    def as_json(self) -> dict:
        return {
            "id": self.attendance_id,
            "lectureId": self.lecture_id,
            "studentId": self.student_id,
            "status": self.status.value,
            "markedAt": to_iso(self.marked_at),
        }


@dataclass(frozen=True)
class LectureAttendanceRow:
    """Read-model for one lecture's sheet: record joined with the student."""

    record: AttendanceRecord
    student: User

    def as_json(self) -> dict:
        return {**self.record.as_json(), "student": self.student.as_json()}


@dataclass(frozen=True)
class StudentAttendanceRow:
    """Read-model for a student's history: record joined with lecture and class."""

    record: AttendanceRecord
    lecture: Lecture
    class_record: ClassRecord

    def as_json(self) -> dict:
        return {
            **self.record.as_json(),
            "lecture": {**self.lecture.as_json(), "class": self.class_record.as_json()},
        }
