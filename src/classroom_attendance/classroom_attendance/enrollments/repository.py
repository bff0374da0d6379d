from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import Enrollment, EnrollmentWithClass, EnrollmentWithStudent


class EnrollmentRepository(Protocol):
    def create_enrollment(self, *, student_id: int, class_id: int, enrolled_at: datetime) -> Enrollment:
        """Insert a membership row.

        Raises DuplicateEnrollmentError when (student_id, class_id) already exists;
        the storage uniqueness constraint decides, not a prior lookup.
        """

        raise NotImplementedError

    def is_enrolled(self, student_id: int, class_id: int) -> bool:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[EnrollmentWithClass]:
        raise NotImplementedError

    def list_for_class(self, class_id: int) -> Sequence[EnrollmentWithStudent]:
        raise NotImplementedError
