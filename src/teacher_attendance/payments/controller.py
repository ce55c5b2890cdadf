from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, auth_guards, json_object
from ..common.validators import optional_int, require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = auth_guards(container.token_service)
    service = container.payment_service

    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    @api_errors("Failed to fetch payments")
    @token_required
    def list_payments():
        args = request.args
        payments = service.list_payments(
            student_id=optional_int(args.get("studentId"), "studentId"),
            class_id=optional_int(args.get("classId"), "classId"),
            teacher_id=optional_int(args.get("teacherId"), "teacherId"),
        )
        return jsonify([p.to_dict() for p in payments])

    @app.route("/api/payments", methods=["POST"], endpoint="create_payment")
    @api_errors("Failed to create payment")
    @token_required
    def create_payment():
        body = json_object()
        payment = service.record_payment(
            student_id=body.get("studentId"),
            class_id=body.get("classId"),
            amount=body.get("amount"),
            type=body.get("type"),
            date=body.get("date"),
            month=body.get("month"),
            year=body.get("year"),
        )
        return jsonify(payment.to_dict()), 201

    @app.route("/api/payments", methods=["DELETE"], endpoint="delete_payment_by_query")
    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="delete_payment")
    @api_errors("Failed to delete payment")
    @token_required
    def delete_payment(payment_id: int | None = None):
        if payment_id is None:
            raw = request.args.get("id")
            if not raw:
                return jsonify({"error": "Payment ID is required"}), 400
            payment_id = require_int(raw, "id")
        service.delete_payment(payment_id)
        return jsonify({"message": "Payment deleted successfully"})
