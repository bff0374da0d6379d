from __future__ import annotations

from ..core.actor import Actor
from ..core.exceptions import AuthorizationError, NotFoundError
from ..enrollments.repository import EnrollmentRepository
from .model import ClassRecord
from .repository import ClassRepository


class ClassAccess:
    """Ownership checks shared by every class-scoped use case.

    Teachers act on classes they own; students read classes they are enrolled in.
    """

    def __init__(self, classes: ClassRepository, enrollments: EnrollmentRepository):
        self._classes = classes
        self._enrollments = enrollments

    def require_class(self, class_id: int) -> ClassRecord:
        record = self._classes.get_by_id(int(class_id))
        if not record:
            raise NotFoundError("Class not found")
        return record

    def require_owner(self, actor: Actor, class_id: int) -> ClassRecord:
        record = self.require_class(class_id)
        if not actor.is_teacher or record.teacher_id != actor.user_id:
            raise AuthorizationError("Forbidden")
        return record

    def require_member(self, actor: Actor, class_id: int) -> ClassRecord:
        record = self.require_class(class_id)
        if actor.is_teacher and record.teacher_id == actor.user_id:
            return record
        if actor.is_student and self._enrollments.is_enrolled(actor.user_id, record.class_id):
            return record
        raise AuthorizationError("Forbidden")
