from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, ValidationError


def start_session(user_id: int, role: Role, full_name: str) -> None:
    session.clear()
    session.permanent = True
    session["user_id"] = int(user_id)
    session["role"] = role.value
    session["name"] = full_name


def current_actor() -> Actor:
    """Resolve the caller from the session; 401 when there is none."""
    user_id = session.get("user_id")
    role = session.get("role")
    if user_id is None or role is None:
        raise AuthenticationError("Unauthorized")
    try:
        return Actor(user_id=int(user_id), role=Role(role))
    except (TypeError, ValueError):
        session.clear()
        raise AuthenticationError("Unauthorized") from None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_actor()
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if current_actor().role != role:
                raise AuthorizationError("Forbidden")
            return view(*args, **kwargs)

        return wrapper

    return decorator


teacher_required = role_required(Role.TEACHER)
student_required = role_required(Role.STUDENT)


def json_body() -> Any:
    data = request.get_json(silent=True)
    return {} if data is None else data


def optional_int_arg(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(
            f"{name} must be an integer",
            errors=[{"field": name, "message": f"{name} must be an integer"}],
        ) from None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        body: dict = {"message": str(exc)}
        if isinstance(exc, ValidationError) and exc.errors:
            body["errors"] = exc.errors
        app.logger.info("%s %s -> %s %s", request.method, request.path, exc.status_code, exc)
        return jsonify(body), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        app.logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=exc)
        return jsonify({"message": "Internal server error"}), 500
