from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..core.enums import AttendanceStatus

STATUS_CHOICES = ", ".join(s.value for s in AttendanceStatus)


class MarkAttendancePayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)

    lecture_id: Optional[int] = None
    student_id: Optional[int] = None
    status: Optional[AttendanceStatus] = None

    @field_validator("lecture_id", mode="before")
    @classmethod
    def _lecture_id(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "Lecture is required")
        return v

    @field_validator("student_id", mode="before")
    @classmethod
    def _student_id(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "Student is required")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        try:
            return AttendanceStatus(v)
        except ValueError:
            raise PydanticCustomError("enum", f"Status must be one of: {STATUS_CHOICES}") from None
