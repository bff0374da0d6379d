from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from ..common.validators import require_min_length, require_non_empty


class CreateClassPayload(BaseModel):
    model_config = ConfigDict(validate_default=True)

    name: str = ""
    description: Optional[str] = None
    password: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return require_non_empty(v, "Class name is required")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v):
        if v is None:
            return None
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", "Description must be text")
        return v.strip() or None

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return require_min_length(v, "Password is required", 1)
