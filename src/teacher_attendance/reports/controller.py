from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, auth_guards
from ..common.validators import optional_int
from ..container import Container
from .service import parse_period


def register(app: Flask, container: Container) -> None:
    token_required, _ = auth_guards(container.token_service)
    reports = container.report_service

    @app.route("/api/reports/attendance-summary", methods=["GET"], endpoint="report_attendance_summary")
    @api_errors("Failed to fetch attendance summary")
    @token_required
    def attendance_summary():
        month, year = parse_period(request.args.get("month"), request.args.get("year"))
        teacher_id = optional_int(request.args.get("teacherId"), "teacherId")
        return jsonify(reports.attendance_summary(month=month, year=year, teacher_id=teacher_id))

    @app.route("/api/reports/student-reports", methods=["GET"], endpoint="report_student_reports")
    @api_errors("Failed to fetch student reports")
    @token_required
    def student_reports():
        month, year = parse_period(request.args.get("month"), request.args.get("year"))
        teacher_id = optional_int(request.args.get("teacherId"), "teacherId")
        return jsonify(reports.student_reports(month=month, year=year, teacher_id=teacher_id))

    @app.route("/api/reports/class-student-details", methods=["GET"], endpoint="report_class_student_details")
    @api_errors("Failed to fetch class student details")
    @token_required
    def class_student_details():
        class_id = request.args.get("classId")
        if not class_id:
            return jsonify({"error": "Class ID is required"}), 400
        month, year = parse_period(request.args.get("month"), request.args.get("year"))
        return jsonify(reports.class_student_details(class_id=class_id, month=month, year=year))

    @app.route("/api/reports/monthly-earnings-by-class", methods=["GET"], endpoint="report_monthly_earnings")
    @api_errors("Internal Server Error")
    @token_required
    def monthly_earnings_by_class():
        return jsonify(
            reports.monthly_earnings_by_class(
                teacher_id=request.args.get("teacherId"),
                year=request.args.get("year"),
                month=request.args.get("month"),
            )
        )
