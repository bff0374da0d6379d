from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class Lecture:
    """Domain entity: one class session attendance is recorded against."""

    lecture_id: int
    class_id: int
    title: str
    date: datetime
    created_at: Optional[datetime] = None

    def as_json(self) -> dict:
        return {
            "id": self.lecture_id,
            "classId": self.class_id,
            "title": self.title,
            "date": to_iso(self.date),
            "createdAt": to_iso(self.created_at),
        }
