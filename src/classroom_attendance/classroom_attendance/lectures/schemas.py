from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..common.validators import require_non_empty


class CreateLecturePayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)

    class_id: Optional[int] = None
    title: str = ""
    date: Optional[datetime] = None

    @field_validator("class_id", mode="before")
    @classmethod
    def _class_id(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "Class is required")
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        return require_non_empty(v, "Title is required")

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        if v is None or v == "":
            raise PydanticCustomError("required", "Date is required")
        return v

    @field_validator("date")
    @classmethod
    def _naive_local(cls, v: datetime) -> datetime:
        # DATETIME columns carry no zone; store local wall time.
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v
