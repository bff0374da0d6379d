from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..classes.access import ClassAccess
from ..core.actor import Actor
from ..core.exceptions import NotFoundError
from .model import Lecture
from .repository import LectureRepository

logger = logging.getLogger(__name__)


class LectureService:
    def __init__(self, lectures: LectureRepository, access: ClassAccess):
        self._lectures = lectures
        self._access = access

    def create(self, actor: Actor, *, class_id: int, title: str, date: datetime) -> Lecture:
        record = self._access.require_owner(actor, class_id)
        lecture = self._lectures.create_lecture(class_id=record.class_id, title=title, date=date)
        logger.info("Lecture %s created for class %s", lecture.lecture_id, record.class_id)
        return lecture

    def get(self, lecture_id: int) -> Optional[Lecture]:
        return self._lectures.get_by_id(int(lecture_id))

    def require_lecture(self, lecture_id: int) -> Lecture:
        lecture = self.get(lecture_id)
        if not lecture:
            raise NotFoundError("Lecture not found")
        return lecture

    def list_for_class(self, actor: Actor, class_id: int) -> Sequence[Lecture]:
        record = self._access.require_member(actor, class_id)
        return self._lectures.list_for_class(record.class_id)

    def delete(self, actor: Actor, lecture_id: int) -> None:
        lecture = self.require_lecture(lecture_id)
        self._access.require_owner(actor, lecture.class_id)
        self._lectures.delete_by_id(lecture.lecture_id)
        logger.info("Lecture %s deleted from class %s", lecture.lecture_id, lecture.class_id)
