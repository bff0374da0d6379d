from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..common.validators import require_min_length, require_non_empty


class JoinClassPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)

    class_code: str = ""
    password: str = ""
    full_name: str = ""

    @field_validator("class_code", mode="before")
    @classmethod
    def _class_code(cls, v):
        return require_non_empty(v, "Class code is required").upper()

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return require_min_length(v, "Password is required", 1)

    @field_validator("full_name", mode="before")
    @classmethod
    def _full_name(cls, v):
        return require_non_empty(v, "Full name is required")
