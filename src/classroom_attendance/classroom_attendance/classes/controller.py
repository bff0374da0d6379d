from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body, login_required, teacher_required
from ..common.validators import parse_payload
from ..container import Container
from .schemas import CreateClassPayload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["POST"], endpoint="api_create_class")
    @teacher_required
    def api_create_class():
        payload = parse_payload(CreateClassPayload, json_body())
        record = container.class_service.create_class(
            current_actor(),
            name=payload.name,
            description=payload.description,
            password=payload.password,
        )
        return jsonify(record.as_json()), 201

    @app.route("/api/classes", methods=["GET"], endpoint="api_list_classes")
    @login_required
    def api_list_classes():
        actor = current_actor()
        if actor.is_teacher:
            items = container.class_service.list_by_teacher(actor.user_id)
        else:
            items = container.enrollment_service.list_for_student(actor.user_id)
        return jsonify([item.as_json() for item in items])

    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="api_delete_class")
    @teacher_required
    def api_delete_class(class_id: int):
        container.class_service.delete_class(current_actor(), class_id)
        return "", 204

    @app.route("/api/classes/<int:class_id>/students", methods=["GET"], endpoint="api_class_students")
    @teacher_required
    def api_class_students(class_id: int):
        roster = container.enrollment_service.roster(current_actor(), class_id)
        return jsonify([line.as_json() for line in roster])
