from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class ClassRecord:
    """Domain entity: a class owned by one teacher, joined with class_code + password."""

    class_id: int
    name: str
    description: Optional[str]
    class_code: str
    password_hash: str
    teacher_id: int
    created_at: Optional[datetime] = None

    def as_json(self) -> dict:
        return {
            "id": self.class_id,
            "name": self.name,
            "description": self.description,
            "classCode": self.class_code,
            "teacherId": self.teacher_id,
            "createdAt": to_iso(self.created_at),
        }
