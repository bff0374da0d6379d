from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, LectureAttendanceRow, StudentAttendanceRow


class AttendanceRepository(Protocol):
    def upsert(
        self,
        *,
        lecture_id: int,
        student_id: int,
        status: AttendanceStatus,
        marked_at: datetime,
    ) -> AttendanceRecord:
        """Insert the (lecture, student) record or overwrite its status and marked_at.

        Must be a single atomic statement keyed by the unique (lecture_id, student_id)
        constraint so concurrent marks converge on one row.
        """

        raise NotImplementedError

    def list_for_lecture(self, lecture_id: int) -> Sequence[LectureAttendanceRow]:
        raise NotImplementedError

    def list_for_student(self, student_id: int, class_id: Optional[int] = None) -> Sequence[StudentAttendanceRow]:
        """Records of one student, newest lecture first, optionally for one class."""

        raise NotImplementedError
