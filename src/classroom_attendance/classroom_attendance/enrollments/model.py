from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..classes.model import ClassRecord
from ..common.datetime_utils import to_iso
from ..users.model import User


@dataclass(frozen=True)
class Enrollment:
    """Domain entity: a student's membership in a class. Never updated."""

    enrollment_id: int
    student_id: int
    class_id: int
    enrolled_at: Optional[datetime] = None

    def as_json(self) -> dict:
        return {
            "id": self.enrollment_id,
            "studentId": self.student_id,
            "classId": self.class_id,
            "enrolledAt": to_iso(self.enrolled_at),
        }


@dataclass(frozen=True)
class EnrollmentWithClass:
    """Read-model: a student's enrollment joined with its class."""

    enrollment: Enrollment
    class_record: ClassRecord

    def as_json(self) -> dict:
        return {**self.enrollment.as_json(), "class": self.class_record.as_json()}


@dataclass(frozen=True)
class EnrollmentWithStudent:
    """Read-model: one roster line (enrollment joined with the student)."""

    enrollment: Enrollment
    student: User

    def as_json(self) -> dict:
        return {**self.enrollment.as_json(), "student": self.student.as_json()}
