from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body, login_required, optional_int_arg, teacher_required
from ..common.validators import parse_payload
from ..container import Container
from .schemas import MarkAttendancePayload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="api_mark_attendance")
    @teacher_required
    def api_mark_attendance():
        payload = parse_payload(MarkAttendancePayload, json_body())
        record = container.attendance_service.mark(
            current_actor(),
            lecture_id=payload.lecture_id,
            student_id=payload.student_id,
            status=payload.status,
        )
        return jsonify(record.as_json()), 201

    @app.route("/api/lectures/<int:lecture_id>/attendance", methods=["GET"], endpoint="api_lecture_attendance")
    @login_required
    def api_lecture_attendance(lecture_id: int):
        rows = container.attendance_service.for_lecture(current_actor(), lecture_id)
        return jsonify([row.as_json() for row in rows])

    @app.route("/api/attendance/student/<int:student_id>", methods=["GET"], endpoint="api_student_attendance")
    @login_required
    def api_student_attendance(student_id: int):
        rows = container.attendance_service.for_student(current_actor(), student_id, optional_int_arg("classId"))
        return jsonify([row.as_json() for row in rows])
