from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, auth_guards, current_claims, json_object
from ..common.validators import require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, admin_required = auth_guards(container.token_service)
    service = container.teacher_service

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @api_errors("Failed to fetch teachers")
    @token_required
    def list_teachers():
        company_id = request.args.get("companyId") or None
        return jsonify([t.to_dict() for t in service.list_teachers(company_id=company_id)])

    @app.route("/api/teachers/company/<company_id>", methods=["GET"], endpoint="list_company_teachers")
    @api_errors("Failed to fetch company teachers")
    @token_required
    def list_company_teachers(company_id: str):
        return jsonify([t.to_dict() for t in service.list_teachers(company_id=company_id)])

    @app.route("/api/teachers/<int:teacher_id>", methods=["GET"], endpoint="get_teacher")
    @api_errors("Failed to fetch teacher")
    @token_required
    def get_teacher(teacher_id: int):
        return jsonify(service.get_teacher(teacher_id).to_dict())

    @app.route("/api/teachers", methods=["POST"], endpoint="create_teacher")
    @api_errors("Failed to create teacher")
    @admin_required
    def create_teacher():
        body = json_object()
        teacher = service.create_teacher(
            name=body.get("name"),
            email=body.get("email"),
            teacher_code=body.get("teacherId"),
            status=body.get("status"),
            phone=body.get("phone"),
            profile_picture=body.get("profilePicture"),
            company_id=body.get("companyId"),
            scope=current_claims().get("companyId"),
        )
        return jsonify(teacher.to_dict()), 201

    @app.route("/api/teachers", methods=["PUT"], endpoint="update_teacher_by_body")
    @app.route("/api/teachers/<int:teacher_id>", methods=["PUT"], endpoint="update_teacher")
    @api_errors("Failed to update teacher")
    @admin_required
    def update_teacher(teacher_id: int | None = None):
        body = json_object()
        changes = dict(body)
        if teacher_id is None:
            teacher_id = require_int(changes.pop("id", None), "id")
        else:
            changes.pop("id", None)
        return jsonify(service.update_teacher(teacher_id, changes, scope=current_claims().get("companyId")).to_dict())

    @app.route("/api/teachers/<int:teacher_id>/status", methods=["PUT"], endpoint="update_teacher_status")
    @api_errors("Failed to update teacher status")
    @admin_required
    def update_teacher_status(teacher_id: int):
        body = json_object()
        return jsonify(service.set_status(teacher_id, body.get("status"), scope=current_claims().get("companyId")).to_dict())

    @app.route("/api/teachers", methods=["DELETE"], endpoint="delete_teacher_by_query")
    @app.route("/api/teachers/<int:teacher_id>", methods=["DELETE"], endpoint="delete_teacher")
    @api_errors("Failed to delete teacher")
    @admin_required
    def delete_teacher(teacher_id: int | None = None):
        if teacher_id is None:
            raw = request.args.get("id")
            if not raw:
                return jsonify({"error": "Teacher ID is required"}), 400
            teacher_id = require_int(raw, "id")
        service.delete_teacher(teacher_id, scope=current_claims().get("companyId"))
        return jsonify({"message": "Teacher deleted successfully"})
