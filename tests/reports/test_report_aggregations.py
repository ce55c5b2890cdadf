from __future__ import annotations

import pytest

from teacher_attendance.attendance.service import AttendanceService
from teacher_attendance.core.exceptions import NotFoundError, ValidationError
from teacher_attendance.payments.service import PaymentService
from teacher_attendance.reports.service import ReportService, parse_period


@pytest.fixture
def school(classes_repo, students_repo, attendance_repo, payments_repo):
    math = classes_repo.create(name="Math", teacher_id=1)
    art = classes_repo.create(name="Art", teacher_id=1)
    other = classes_repo.create(name="Chem", teacher_id=2)
    an = students_repo.create(name="An", student_code="S1", email=None, class_id=math)
    binh = students_repo.create(name="Binh", student_code="S2", email=None, class_id=math)
    chi = students_repo.create(name="Chi", student_code="S3", email=None, class_id=other)

    attendance = AttendanceService(attendance_repo)
    for sid, day, session, status in [
        (an, "2026-02-02", "Morning", "present"),
        (an, "2026-02-03", "Evening", "late"),
        (binh, "2026-02-02", "Morning", "absent"),
        (chi, "2026-02-02", "Morning", "present"),
        (an, "2026-03-02", "Morning", "present"),
    ]:
        attendance.record({"studentId": sid, "date": day, "session": session, "status": status})

    payments = PaymentService(payments_repo)
    payments.record_payment(student_id=an, class_id=math, amount=100, type="full", date="2026-02-01")
    payments.record_payment(student_id=binh, class_id=math, amount=50, type="half", date="2026-02-09")
    payments.record_payment(student_id=an, class_id=math, amount=100, type="full", date="2026-03-01")
    payments.record_payment(student_id=chi, class_id=other, amount=80, type="full", date="2026-02-01")

    return {"math": math, "art": art, "an": an, "binh": binh}


@pytest.fixture
def reports(attendance_repo, students_repo, classes_repo, payments_repo):
    return ReportService(attendance_repo, students_repo, classes_repo, payments_repo)


def test_parse_period_requires_both_values():
    assert parse_period("2", "2026") == (2, 2026)
    with pytest.raises(ValidationError, match="month and year are required"):
        parse_period(None, "2026")
    with pytest.raises(ValidationError):
        parse_period("13", "2026")


def test_attendance_summary_groups_by_session(school, reports):
    summary = reports.attendance_summary(month=2, year=2026, teacher_id=1)

    assert summary == [
        {"session": "Evening", "present": 0, "absent": 0, "late": 1},
        {"session": "Morning", "present": 1, "absent": 1, "late": 0},
    ]


def test_student_reports_include_students_without_records(school, reports, students_repo):
    students_repo.create(name="Dung", student_code="S4", email=None, class_id=school["math"])

    rows = {r["studentId"]: r for r in reports.student_reports(month=2, year=2026, teacher_id=1)}

    assert set(rows) == {"S1", "S2", "S4"}
    assert rows["S1"]["present"] == 1 and rows["S1"]["late"] == 1 and rows["S1"]["total"] == 2
    assert rows["S4"]["total"] == 0


def test_class_student_details(school, reports):
    details = reports.class_student_details(class_id=str(school["math"]), month=2, year=2026)

    assert details["class"]["name"] == "Math"
    an = next(s for s in details["students"] if s["id"] == school["an"])
    assert an["attendance"] == [
        {"date": "2026-02-02", "session": "Morning", "status": "present"},
        {"date": "2026-02-03", "session": "Evening", "status": "late"},
    ]


def test_class_student_details_errors(reports):
    with pytest.raises(ValidationError, match="Class ID is required"):
        reports.class_student_details(class_id="", month=2, year=2026)
    with pytest.raises(NotFoundError, match="Class not found"):
        reports.class_student_details(class_id=99, month=2, year=2026)


def test_monthly_earnings_by_class(school, reports):
    result = reports.monthly_earnings_by_class(teacher_id="1")

    by_name = {r["className"]: r for r in result}
    assert by_name["Art"]["monthlyBreakdown"] == []
    assert by_name["Math"]["monthlyBreakdown"] == [
        {"month": 3, "year": 2026, "amount": 100, "paymentCount": 1},
        {"month": 2, "year": 2026, "amount": 150, "paymentCount": 2},
    ]
    assert "Chem" not in by_name


def test_monthly_earnings_edge_cases(school, reports):
    with pytest.raises(ValidationError, match="Teacher ID is required"):
        reports.monthly_earnings_by_class(teacher_id=None)
    assert reports.monthly_earnings_by_class(teacher_id=77) == []

    only_feb = reports.monthly_earnings_by_class(teacher_id=1, year="2026", month="2")
    math = next(r for r in only_feb if r["className"] == "Math")
    assert [m["month"] for m in math["monthlyBreakdown"]] == [2]
