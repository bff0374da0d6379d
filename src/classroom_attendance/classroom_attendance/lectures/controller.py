from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body, login_required, teacher_required
from ..common.validators import parse_payload
from ..container import Container
from .schemas import CreateLecturePayload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/lectures", methods=["POST"], endpoint="api_create_lecture")
    @teacher_required
    def api_create_lecture():
        payload = parse_payload(CreateLecturePayload, json_body())
        lecture = container.lecture_service.create(
            current_actor(),
            class_id=payload.class_id,
            title=payload.title,
            date=payload.date,
        )
        return jsonify(lecture.as_json()), 201

    @app.route("/api/lectures/<int:lecture_id>", methods=["DELETE"], endpoint="api_delete_lecture")
    @teacher_required
    def api_delete_lecture(lecture_id: int):
        container.lecture_service.delete(current_actor(), lecture_id)
        return "", 204

    @app.route("/api/classes/<int:class_id>/lectures", methods=["GET"], endpoint="api_class_lectures")
    @login_required
    def api_class_lectures(class_id: int):
        lectures = container.lecture_service.list_for_class(current_actor(), class_id)
        return jsonify([lecture.as_json() for lecture in lectures])
