from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, login_required, optional_int_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes/<int:class_id>/stats", methods=["GET"], endpoint="api_class_stats")
    @login_required
    def api_class_stats(class_id: int):
        stats = container.stats_service.class_stats(current_actor(), class_id)
        return jsonify(stats.as_json())

    @app.route(
        "/api/attendance/student/<int:student_id>/summary",
        methods=["GET"],
        endpoint="api_student_attendance_summary",
    )
    @login_required
    def api_student_attendance_summary(student_id: int):
        summary = container.stats_service.student_summary(current_actor(), student_id, optional_int_arg("classId"))
        return jsonify(summary.as_json())
