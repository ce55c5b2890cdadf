from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, auth_guards, json_object
from ..common.validators import optional_int, require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = auth_guards(container.token_service)
    service = container.class_service

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @api_errors("Failed to fetch classes")
    @token_required
    def list_classes():
        teacher_id = optional_int(request.args.get("teacherId"), "teacherId")
        return jsonify([c.to_dict() for c in service.list_classes(teacher_id=teacher_id)])

    @app.route("/api/classes/<int:class_id>", methods=["GET"], endpoint="get_class")
    @api_errors("Failed to fetch class")
    @token_required
    def get_class(class_id: int):
        return jsonify(service.get_class(class_id).to_dict())

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @api_errors("Failed to create class")
    @token_required
    def create_class():
        body = json_object()
        cls = service.create_class(name=body.get("name"), teacher_id=body.get("teacherId"))
        return jsonify(cls.to_dict()), 201

    @app.route("/api/classes", methods=["PUT"], endpoint="update_class_by_body")
    @app.route("/api/classes/<int:class_id>", methods=["PUT"], endpoint="update_class")
    @api_errors("Failed to update class")
    @token_required
    def update_class(class_id: int | None = None):
        changes = dict(json_object())
        if class_id is None:
            class_id = require_int(changes.pop("id", None), "id")
        else:
            changes.pop("id", None)
        return jsonify(service.update_class(class_id, changes).to_dict())

    @app.route("/api/classes", methods=["DELETE"], endpoint="delete_class_by_query")
    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="delete_class")
    @api_errors("Failed to delete class")
    @token_required
    def delete_class(class_id: int | None = None):
        if class_id is None:
            raw = request.args.get("id")
            if not raw:
                return jsonify({"error": "Class ID is required"}), 400
            class_id = require_int(raw, "id")
        service.delete_class(class_id)
        return jsonify({"message": "Class deleted successfully"})
