from __future__ import annotations

from dataclasses import dataclass

from .enums import Role


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, resolved from the session by the controllers."""

    user_id: int
    role: Role

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT
