from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

import pydantic
from pydantic_core import PydanticCustomError

from ..core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)


def require_non_empty(value: Optional[str], message: str) -> str:
    """Field validator helper: reject missing or blank strings with a custom message."""
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("required", message)
    return value.strip()


def require_min_length(value: Optional[str], message: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise PydanticCustomError("too_short", message)
    return value


def _field_name(schema: Type[pydantic.BaseModel], loc: tuple) -> str:
    if not loc:
        return "body"
    # Missing fields are reported by attribute name, present ones by alias.
    field = schema.model_fields.get(loc[0]) if isinstance(loc[0], str) else None
    head = field.alias if field is not None and field.alias else loc[0]
    return ".".join(str(part) for part in (head, *loc[1:]))


def _error_message(err: Mapping[str, Any]) -> str:
    # ValueError raised from a validator: keep our message, drop pydantic's "Value error, " prefix.
    ctx = err.get("ctx") or {}
    if err.get("type") == "value_error" and ctx.get("error") is not None:
        return str(ctx["error"])
    return str(err.get("msg"))


def parse_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Validate a JSON body against a schema.

    Raises our ValidationError with one {"field", "message"} entry per failing field
    so controllers never see pydantic exceptions.
    """

    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    try:
        return schema.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        errors = [{"field": _field_name(schema, err["loc"]), "message": _error_message(err)} for err in exc.errors()]
        raise ValidationError(errors[0]["message"] if errors else "Invalid request", errors=errors) from exc
