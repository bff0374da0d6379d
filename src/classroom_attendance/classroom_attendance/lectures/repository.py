from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Lecture


class LectureRepository(Protocol):
    def create_lecture(self, *, class_id: int, title: str, date: datetime) -> Lecture:
        raise NotImplementedError

    def get_by_id(self, lecture_id: int) -> Optional[Lecture]:
        raise NotImplementedError

    def list_for_class(self, class_id: int) -> Sequence[Lecture]:
        """Lectures of one class, newest date first."""

        raise NotImplementedError

    def delete_by_id(self, lecture_id: int) -> bool:
        raise NotImplementedError
