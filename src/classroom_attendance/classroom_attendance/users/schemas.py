from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, PRN_PATTERN
from ..core.enums import Role


class RegisterPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)

    username: str = ""
    password: str = ""
    role: str = ""
    full_name: str = ""
    email: str = ""
    branch: str = ""
    prn: Optional[str] = None
    year: Optional[str] = None

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, v):
        return require_non_empty(v, "Username is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return require_min_length(v, f"Password must be at least {MIN_PASSWORD_LENGTH} characters", MIN_PASSWORD_LENGTH)

    @field_validator("role", mode="before")
    @classmethod
    def _role(cls, v):
        if not isinstance(v, str) or v not in {r.value for r in Role}:
            raise PydanticCustomError("enum", "Role must be teacher or student")
        return v

    @field_validator("full_name", mode="before")
    @classmethod
    def _full_name(cls, v):
        return require_non_empty(v, "Full name is required")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        v = require_non_empty(v, "Email is required")
        if "@" not in v:
            raise PydanticCustomError("email", "Email is invalid")
        return v

    @field_validator("branch", mode="before")
    @classmethod
    def _branch(cls, v):
        return require_non_empty(v, "Branch is required")

    # prn/year only apply to students; validated after role (declaration order).
    @field_validator("prn", mode="before")
    @classmethod
    def _prn(cls, v, info: ValidationInfo):
        if info.data.get("role") != Role.STUDENT.value:
            return v or None
        v = require_non_empty(v, "PRN is required for students")
        if not re.match(PRN_PATTERN, v, re.IGNORECASE):
            raise PydanticCustomError("prn", "PRN must be 6-20 letters, digits or dashes")
        return v

    @field_validator("year", mode="before")
    @classmethod
    def _year(cls, v, info: ValidationInfo):
        if info.data.get("role") != Role.STUDENT.value:
            return v or None
        return require_non_empty(v, "Year is required for students")

    @property
    def role_enum(self) -> Role:
        return Role(self.role)


class LoginPayload(BaseModel):
    model_config = ConfigDict(validate_default=True)

    username: str = ""
    password: str = ""

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, v):
        return require_non_empty(v, "Username is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return require_min_length(v, "Password is required", 1)
