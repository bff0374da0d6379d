from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import current_actor, json_body, login_required, start_session
from ..common.validators import parse_payload
from ..container import Container
from ..core.exceptions import AuthenticationError, NotFoundError
from .schemas import LoginPayload, RegisterPayload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def api_register():
        payload = parse_payload(RegisterPayload, json_body())
        user = container.auth_service.register(payload)
        start_session(user.user_id, user.role, user.full_name)
        return jsonify(user.as_json()), 201

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        payload = parse_payload(LoginPayload, json_body())
        user = container.auth_service.authenticate(payload.username, payload.password)
        start_session(user.user_id, user.role, user.full_name)
        return jsonify(user.as_json())

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    @login_required
    def api_logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/user", methods=["GET"], endpoint="api_user")
    @login_required
    def api_user():
        try:
            user = container.user_service.get_user(current_actor().user_id)
        except NotFoundError:
            # Account removed while the session was alive.
            session.clear()
            raise AuthenticationError("Unauthorized") from None
        return jsonify(user.as_json())
