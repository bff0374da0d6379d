from __future__ import annotations

from typing import Optional

from ..attendance.service import AttendanceService
from ..classes.access import ClassAccess
from ..core.actor import Actor
from ..core.enums import AttendanceStatus
from .model import ClassStats, StudentAttendanceSummary
from .repository import StatsRepository


def attendance_percentage(present: int, total: int) -> float:
    """100 * present / total, and 0 when nothing has been marked yet."""
    if total <= 0:
        return 0.0
    return (present / total) * 100


class StatsService:
    """Derived statistics, recomputed from the ledgers on every read."""

    def __init__(self, stats: StatsRepository, attendance: AttendanceService, access: ClassAccess):
        self._stats = stats
        self._attendance = attendance
        self._access = access

    def compute_stats(self, class_id: int) -> ClassStats:
        counts = self._stats.get_class_counts(int(class_id))
        return ClassStats(
            total_lectures=counts.total_lectures,
            total_students=counts.total_students,
            average_attendance=attendance_percentage(counts.total_present, counts.total_records),
        )

    def class_stats(self, actor: Actor, class_id: int) -> ClassStats:
        record = self._access.require_member(actor, class_id)
        return self.compute_stats(record.class_id)

    def student_summary(
        self,
        actor: Actor,
        student_id: int,
        class_id: Optional[int] = None,
    ) -> StudentAttendanceSummary:
        rows = self._attendance.for_student(actor, student_id, class_id)
        by_status = {status: 0 for status in AttendanceStatus}
        for row in rows:
            by_status[row.record.status] += 1

        total = len(rows)
        present = by_status[AttendanceStatus.PRESENT]
        return StudentAttendanceSummary(
            total=total,
            present=present,
            absent=by_status[AttendanceStatus.ABSENT],
            late=by_status[AttendanceStatus.LATE],
            percentage=round(attendance_percentage(present, total)),
        )
