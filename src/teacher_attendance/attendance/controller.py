from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, auth_guards, json_object, json_payload
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = auth_guards(container.token_service)
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @api_errors("Failed to fetch attendance")
    @token_required
    def list_attendance():
        args = request.args
        records = service.list_attendance(
            student_id=optional_int(args.get("studentId"), "studentId"),
            class_id=optional_int(args.get("classId"), "classId"),
            teacher_id=optional_int(args.get("teacherId"), "teacherId"),
            month=optional_int(args.get("month"), "month"),
            year=optional_int(args.get("year"), "year"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="get_attendance")
    @api_errors("Failed to fetch attendance record")
    @token_required
    def get_attendance(attendance_id: int):
        return jsonify(service.get_record(attendance_id).to_dict())

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @api_errors("Failed to create attendance record")
    @token_required
    def create_attendance():
        return jsonify(service.record(json_object()).to_dict()), 201

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="create_attendance_bulk")
    @api_errors("Failed to create attendance records")
    @token_required
    def create_attendance_bulk():
        records = service.record_bulk(json_payload())
        return jsonify([r.to_dict() for r in records]), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @api_errors("Failed to update attendance record")
    @token_required
    def update_attendance(attendance_id: int):
        changes = dict(json_object())
        changes.pop("id", None)
        return jsonify(service.update_record(attendance_id, changes).to_dict())

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @api_errors("Failed to delete attendance record")
    @token_required
    def delete_attendance(attendance_id: int):
        service.delete_record(attendance_id)
        return jsonify({"message": "Attendance record deleted successfully"})
