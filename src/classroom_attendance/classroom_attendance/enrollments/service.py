from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence

from werkzeug.security import check_password_hash

from ..classes.access import ClassAccess
from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local
from ..core.actor import Actor
from ..core.exceptions import AuthenticationError, AuthorizationError, DuplicateEnrollmentError, NotFoundError
from .model import Enrollment, EnrollmentWithClass, EnrollmentWithStudent
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Use cases: students joining classes, teachers reading rosters."""

    def __init__(
        self,
        enrollments: EnrollmentRepository,
        classes: ClassRepository,
        access: ClassAccess,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._enrollments = enrollments
        self._classes = classes
        self._access = access
        self._clock = clock

    def enroll(self, student_id: int, class_id: int) -> Enrollment:
        # Fast path only; the unique (student_id, class_id) constraint is what
        # rejects a concurrent double join.
        if self._enrollments.is_enrolled(student_id, class_id):
            raise DuplicateEnrollmentError()
        enrollment = self._enrollments.create_enrollment(
            student_id=int(student_id),
            class_id=int(class_id),
            enrolled_at=self._clock(),
        )
        logger.info("Student %s enrolled in class %s", student_id, class_id)
        return enrollment

    def join_class(self, actor: Actor, *, class_code: str, password: str, full_name: str) -> EnrollmentWithClass:
        if not actor.is_student:
            raise AuthorizationError("Only students can join classes")

        record = self._classes.get_by_code(class_code)
        if not record:
            raise NotFoundError("Class not found")

        if not check_password_hash(record.password_hash, password):
            logger.warning("Student %s used a wrong password for class %s", actor.user_id, record.class_code)
            raise AuthenticationError("Invalid password")

        enrollment = self.enroll(actor.user_id, record.class_id)
        return EnrollmentWithClass(enrollment=enrollment, class_record=record)

    def is_enrolled(self, student_id: int, class_id: int) -> bool:
        return self._enrollments.is_enrolled(int(student_id), int(class_id))

    def list_for_student(self, student_id: int) -> Sequence[EnrollmentWithClass]:
        return self._enrollments.list_for_student(int(student_id))

    def list_for_class(self, class_id: int) -> Sequence[EnrollmentWithStudent]:
        return self._enrollments.list_for_class(int(class_id))

    def roster(self, actor: Actor, class_id: int) -> Sequence[EnrollmentWithStudent]:
        record = self._access.require_owner(actor, class_id)
        return self.list_for_class(record.class_id)
