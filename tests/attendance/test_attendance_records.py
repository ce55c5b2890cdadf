from __future__ import annotations

from datetime import date

import pytest

from teacher_attendance.attendance.service import AttendanceService
from teacher_attendance.core.enums import AttendanceStatus
from teacher_attendance.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def svc(attendance_repo):
    return AttendanceService(attendance_repo)


def _payload(**overrides):
    data = {"studentId": 1, "date": "2026-02-14", "session": "Morning", "status": "present"}
    data.update(overrides)
    return data


def test_month_and_year_default_from_date(svc):
    rec = svc.record(_payload(date="2025-12-31T23:00:00Z"))

    assert rec.date == date(2025, 12, 31)
    assert (rec.month, rec.year) == (12, 2025)


def test_explicit_month_wins(svc):
    rec = svc.record(_payload(month=1, year=2026))

    assert (rec.month, rec.year) == (1, 2026)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"studentId": None}, "studentId is required"),
        ({"session": ""}, "session is required"),
        ({"status": "excused"}, "status must be one of"),
        ({"month": 13}, "month must be between 1 and 12"),
    ],
)
def test_invalid_record(svc, overrides, message):
    with pytest.raises(ValidationError, match=message):
        svc.record(_payload(**overrides))


def test_bulk_requires_a_non_empty_array(svc):
    with pytest.raises(ValidationError, match="must be an array"):
        svc.record_bulk({"studentId": 1})
    with pytest.raises(ValidationError, match="At least one"):
        svc.record_bulk([])


def test_bulk_validates_everything_before_writing(svc, attendance_repo):
    batch = [_payload(studentId=1), _payload(studentId=2, status="sick")]

    with pytest.raises(ValidationError, match="Record 1: status"):
        svc.record_bulk(batch)
    assert attendance_repo.rows == {}


def test_bulk_inserts_all_records(svc, attendance_repo):
    saved = svc.record_bulk([_payload(studentId=1), _payload(studentId=2, status="late")])

    assert [r.status for r in saved] == [AttendanceStatus.PRESENT, AttendanceStatus.LATE]
    assert len(attendance_repo.rows) == 2


def test_moving_the_date_moves_the_period(svc):
    rec = svc.record(_payload())

    moved = svc.update_record(rec.attendance_id, {"date": "2026-03-01", "status": "absent"})

    assert (moved.month, moved.year) == (3, 2026)
    assert moved.status is AttendanceStatus.ABSENT


def test_list_filters_by_period(svc):
    svc.record(_payload(date="2026-02-01"))
    svc.record(_payload(date="2026-03-01"))

    assert [r.month for r in svc.list_attendance(month=2, year=2026)] == [2]


def test_delete_unknown_record(svc):
    with pytest.raises(NotFoundError, match="Attendance record not found"):
        svc.delete_record(42)
