from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassCounts:
    """Raw counts for one class, fetched in a single query."""

    total_lectures: int
    total_students: int
    total_present: int
    total_records: int


@dataclass(frozen=True)
class ClassStats:
    total_lectures: int
    total_students: int
    average_attendance: float

    def as_json(self) -> dict:
        return {
            "totalLectures": self.total_lectures,
            "totalStudents": self.total_students,
            "averageAttendance": self.average_attendance,
        }


@dataclass(frozen=True)
class StudentAttendanceSummary:
    total: int
    present: int
    absent: int
    late: int
    percentage: int

    def as_json(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "percentage": self.percentage,
        }
