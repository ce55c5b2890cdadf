from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, auth_guards, current_claims, json_object, require_own_company
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, admin_required = auth_guards(container.token_service)
    service = container.admin_service

    @app.route("/api/admin/register", methods=["POST"], endpoint="admin_register")
    @api_errors("Failed to register admin")
    def admin_register():
        body = json_object()
        admin, token = service.register(
            email=body.get("email"),
            password=body.get("password"),
            name=body.get("name"),
            company_name=body.get("companyName"),
        )
        return jsonify({"admin": admin.to_dict(), "token": token}), 201

    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    @api_errors("Failed to login")
    def admin_login():
        body = json_object()
        admin, token = service.login(email=body.get("email"), password=body.get("password"))
        return jsonify({"admin": admin.to_dict(), "token": token})

    @app.route("/api/admin/profile", methods=["GET"], endpoint="admin_profile")
    @api_errors("Failed to fetch profile")
    @admin_required
    def admin_profile():
        return jsonify(service.get_admin(current_claims()["sub"]).to_dict())

    @app.route("/api/admin/profile", methods=["PUT"], endpoint="admin_update_profile")
    @api_errors("Failed to update profile")
    @admin_required
    def admin_update_profile():
        admin = service.update_profile(current_claims()["sub"], json_object())
        return jsonify(admin.to_dict())

    @app.route("/api/admin/change-password", methods=["PUT"], endpoint="admin_change_password")
    @api_errors("Failed to change password")
    @admin_required
    def admin_change_password():
        body = json_object()
        service.change_password(
            current_claims()["sub"],
            current_password=body.get("currentPassword"),
            new_password=body.get("newPassword"),
        )
        return jsonify({"message": "Password changed successfully"})

    @app.route("/api/admin/preferences", methods=["GET"], endpoint="admin_preferences")
    @api_errors("Failed to fetch preferences")
    @admin_required
    def admin_preferences():
        return jsonify(service.get_preferences(current_claims()["sub"]))

    @app.route("/api/admin/preferences", methods=["PUT"], endpoint="admin_update_preferences")
    @api_errors("Failed to update preferences")
    @admin_required
    def admin_update_preferences():
        return jsonify(service.update_preferences(current_claims()["sub"], json_object()))

    @app.route("/api/admin/preferences", methods=["DELETE"], endpoint="admin_reset_preferences")
    @api_errors("Failed to reset preferences")
    @admin_required
    def admin_reset_preferences():
        return jsonify(service.reset_preferences(current_claims()["sub"]))

    @app.route("/api/admin/active-teachers/<company_id>", methods=["GET"], endpoint="admin_active_teachers")
    @api_errors("Failed to fetch active teachers")
    @token_required
    def admin_active_teachers(company_id: str):
        require_own_company(company_id)
        teachers = container.web_session_service.active_teachers(company_id)
        return jsonify([t.to_dict() for t in teachers])
