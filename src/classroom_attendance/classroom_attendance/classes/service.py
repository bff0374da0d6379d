from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..core.actor import Actor
from ..core.constants import CLASS_CODE_DIGITS, CLASS_CODE_MAX_ATTEMPTS, CLASS_CODE_PREFIX_LENGTH
from ..core.exceptions import AuthorizationError, ConflictError
from .access import ClassAccess
from .model import ClassRecord
from .repository import ClassCodeTakenError, ClassRepository

logger = logging.getLogger(__name__)


def generate_class_code(name: str, now: datetime, *, attempt: int = 0) -> str:
    """First letters of the class name + trailing digits of the clock in milliseconds.

    attempt shifts the numeric part so a retry inside the same millisecond
    still yields a different code.
    """

    prefix = name.strip()[:CLASS_CODE_PREFIX_LENGTH].upper()
    modulus = 10 ** CLASS_CODE_DIGITS
    millis = int(now.timestamp() * 1000)
    return f"{prefix}{(millis + attempt) % modulus:0{CLASS_CODE_DIGITS}d}"


class ClassService:
    """Use cases: create classes, look them up, delete them."""

    def __init__(
        self,
        classes: ClassRepository,
        access: ClassAccess,
        *,
        clock: Callable[[], datetime] = now_local,
        max_code_attempts: int = CLASS_CODE_MAX_ATTEMPTS,
    ):
        self._classes = classes
        self._access = access
        self._clock = clock
        self._max_code_attempts = int(max_code_attempts)

    def create_class(self, actor: Actor, *, name: str, description: Optional[str], password: str) -> ClassRecord:
        if not actor.is_teacher:
            raise AuthorizationError("Only teachers can create classes")

        password_hash = generate_password_hash(password)
        for attempt in range(self._max_code_attempts):
            class_code = generate_class_code(name, self._clock(), attempt=attempt)
            try:
                record = self._classes.create_class(
                    name=name,
                    description=description,
                    class_code=class_code,
                    password_hash=password_hash,
                    teacher_id=actor.user_id,
                )
            except ClassCodeTakenError:
                logger.warning("Class code %s already taken (attempt %d)", class_code, attempt + 1)
                continue
            logger.info("Teacher %s created class %s (%s)", actor.user_id, record.class_id, record.class_code)
            return record

        raise ConflictError("Could not generate a unique class code, please retry")

    def get_by_code(self, class_code: str) -> Optional[ClassRecord]:
        return self._classes.get_by_code(class_code.strip())

    def get_by_id(self, class_id: int) -> Optional[ClassRecord]:
        return self._classes.get_by_id(int(class_id))

    def list_by_teacher(self, teacher_id: int) -> Sequence[ClassRecord]:
        return self._classes.list_by_teacher(int(teacher_id))

    def delete_class(self, actor: Actor, class_id: int) -> None:
        record = self._access.require_owner(actor, class_id)
        self._classes.delete_by_id(record.class_id)
        logger.info("Teacher %s deleted class %s", actor.user_id, record.class_id)
