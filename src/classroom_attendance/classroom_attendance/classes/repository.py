from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassRecord


class ClassCodeTakenError(Exception):
    """Storage signal: the generated class_code collided with an existing one."""


class ClassRepository(Protocol):
    def create_class(
        self,
        *,
        name: str,
        description: Optional[str],
        class_code: str,
        password_hash: str,
        teacher_id: int,
    ) -> ClassRecord:
        """Insert a class; raises ClassCodeTakenError on a class_code collision."""

        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[ClassRecord]:
        raise NotImplementedError

    def get_by_code(self, class_code: str) -> Optional[ClassRecord]:
        raise NotImplementedError

    def list_by_teacher(self, teacher_id: int) -> Sequence[ClassRecord]:
        raise NotImplementedError

    def delete_by_id(self, class_id: int) -> bool:
        """Delete a class; lectures, enrollments and attendance go with it."""

        raise NotImplementedError
