from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body, student_required
from ..common.validators import parse_payload
from ..container import Container
from .schemas import JoinClassPayload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes/join", methods=["POST"], endpoint="api_join_class")
    @student_required
    def api_join_class():
        payload = parse_payload(JoinClassPayload, json_body())
        joined = container.enrollment_service.join_class(
            current_actor(),
            class_code=payload.class_code,
            password=payload.password,
            full_name=payload.full_name,
        )
        return jsonify({"enrollment": joined.enrollment.as_json(), "class": joined.class_record.as_json()}), 201
