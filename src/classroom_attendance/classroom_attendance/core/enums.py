from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role, fixed at registration."""

    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Per-lecture attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
