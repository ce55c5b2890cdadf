from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import api_errors, auth_guards, current_claims, json_object, require_own_company
from ..container import Container
from .qr import render_qr_png


def register(app: Flask, container: Container) -> None:
    token_required, admin_required = auth_guards(container.token_service)
    service = container.web_session_service

    @app.route("/api/web-session/generate-qr", methods=["POST"], endpoint="web_session_generate_qr")
    @api_errors("Failed to generate QR code")
    def generate_qr():
        body = request.get_json(silent=True) or {}
        company_id = body.get("companyId") if isinstance(body, dict) else None
        return jsonify(service.generate(company_id).to_dict())

    @app.route("/api/web-session/qr/<session_id>", methods=["GET"], endpoint="web_session_qr_image")
    @api_errors("Failed to render QR code")
    def qr_image(session_id: str):
        buf = render_qr_png(service.qr_data_for(session_id))
        return send_file(buf, mimetype="image/png")

    @app.route("/api/web-session/verify", methods=["POST"], endpoint="web_session_verify")
    @api_errors("Failed to verify session")
    def verify():
        body = json_object()
        session, teacher, token = service.verify(
            session_id=body.get("sessionId"),
            teacher_id=body.get("teacherId"),
        )
        return jsonify({"sessionId": session.session_id, "token": token, "teacher": teacher.to_dict()})

    @app.route("/api/web-session/check-auth/<session_id>", methods=["GET"], endpoint="web_session_check_auth")
    @api_errors("Failed to check auth")
    def check_auth(session_id: str):
        return jsonify(service.check_auth(session_id))

    @app.route("/api/web-session/disconnect", methods=["POST"], endpoint="web_session_disconnect")
    @api_errors("Failed to disconnect session")
    def disconnect():
        body = json_object()
        service.disconnect(body.get("sessionId"))
        return jsonify({"message": "Session disconnected"})

    @app.route("/api/web-session/active", methods=["GET"], endpoint="web_session_active")
    @api_errors("Failed to fetch active sessions")
    def active_sessions():
        sessions = service.list_active(request.args.get("companyId"))
        return jsonify([s.to_dict() for s in sessions])

    @app.route("/api/web-session/teacher-sessions/<company_id>", methods=["GET"], endpoint="web_session_teacher_sessions")
    @api_errors("Failed to fetch teacher sessions")
    @token_required
    def teacher_sessions(company_id: str):
        require_own_company(company_id)
        return jsonify(service.teacher_sessions(company_id))

    @app.route("/api/web-session/logout-teacher", methods=["POST"], endpoint="web_session_logout_teacher")
    @api_errors("Failed to logout teacher")
    @admin_required
    def logout_teacher():
        body = json_object()
        service.logout_teacher(body.get("sessionId"), company_id=current_claims().get("companyId"))
        return jsonify({"message": "Teacher logged out successfully"})

    @app.route("/api/web-session/teacher-data/<session_id>", methods=["GET"], endpoint="web_session_teacher_data")
    @api_errors("Failed to fetch teacher data")
    @token_required
    def teacher_data(session_id: str):
        return jsonify(service.teacher_data(session_id).to_dict())
