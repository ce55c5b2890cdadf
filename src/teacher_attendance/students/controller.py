from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, auth_guards, json_object
from ..common.validators import optional_int, require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = auth_guards(container.token_service)
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @api_errors("Failed to fetch students")
    @token_required
    def list_students():
        students = service.list_students(
            teacher_id=optional_int(request.args.get("teacherId"), "teacherId"),
            class_id=optional_int(request.args.get("classId"), "classId"),
        )
        return jsonify([s.to_dict() for s in students])

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    @api_errors("Failed to fetch student")
    @token_required
    def get_student(student_id: int):
        return jsonify(service.get_student(student_id).to_dict())

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @api_errors("Failed to create student")
    @token_required
    def create_student():
        body = json_object()
        student = service.create_student(
            name=body.get("name"),
            student_code=body.get("studentId"),
            email=body.get("email"),
            class_id=body.get("classId"),
        )
        return jsonify(student.to_dict()), 201

    @app.route("/api/students", methods=["PUT"], endpoint="update_student_by_body")
    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="update_student")
    @api_errors("Failed to update student")
    @token_required
    def update_student(student_id: int | None = None):
        changes = dict(json_object())
        if student_id is None:
            student_id = require_int(changes.pop("id", None), "id")
        else:
            changes.pop("id", None)
        return jsonify(service.update_student(student_id, changes).to_dict())

    @app.route("/api/students", methods=["DELETE"], endpoint="delete_student_by_query")
    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @api_errors("Failed to delete student")
    @token_required
    def delete_student(student_id: int | None = None):
        if student_id is None:
            raw = request.args.get("id")
            if not raw:
                return jsonify({"error": "Student ID is required"}), 400
            student_id = require_int(raw, "id")
        service.delete_student(student_id)
        return jsonify({"message": "Student deleted successfully"})
