from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_date_field
from ..common.validators import require_enum, require_int, require_month, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    @staticmethod
    def parse_record(payload: Any) -> NewAttendance:
        """Validate one incoming record; month/year default to the record's date."""

        if not isinstance(payload, Mapping):
            raise ValidationError("Attendance record must be a JSON object")

        if payload.get("studentId") in (None, ""):
            raise ValidationError("studentId is required")
        student_id = require_int(payload.get("studentId"), "studentId")
        day = parse_date_field(payload.get("date"), "date")
        session = require_non_empty(payload.get("session"), "session")
        status = require_enum(payload.get("status"), AttendanceStatus, "status")

        month = payload.get("month")
        year = payload.get("year")
        return NewAttendance(
            student_id=student_id,
            date=day,
            session=session,
            status=status,
            month=require_month(month) if month is not None else day.month,
            year=require_int(year, "year") if year is not None else day.year,
        )

    def list_attendance(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        if month is not None:
            month = require_month(month)
        return self._attendance.list(
            student_id=student_id,
            class_id=class_id,
            teacher_id=teacher_id,
            month=month,
            year=year,
        )

    def get_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def record(self, payload: Any) -> AttendanceRecord:
        new = self.parse_record(payload)
        return self.get_record(self._attendance.create(new))

    def record_bulk(self, payload: Any) -> list[AttendanceRecord]:
        if not isinstance(payload, list):
            raise ValidationError("Request body must be an array of attendance records")
        if not payload:
            raise ValidationError("At least one attendance record is required")

        records: list[NewAttendance] = []
        for index, item in enumerate(payload):
            try:
                records.append(self.parse_record(item))
            except ValidationError as e:
                raise ValidationError(f"Record {index}: {e}")

        ids = self._attendance.create_many(records)
        logger.info("Inserted %d attendance records", len(ids))
        return [
            AttendanceRecord(
                attendance_id=new_id,
                student_id=rec.student_id,
                date=rec.date,
                session=rec.session,
                status=rec.status,
                month=rec.month,
                year=rec.year,
            )
            for new_id, rec in zip(ids, records)
        ]

    def update_record(self, attendance_id: int, changes: Mapping[str, Any]) -> AttendanceRecord:
        current = self.get_record(attendance_id)

        fields: dict[str, Any] = {}
        if "studentId" in changes:
            fields["student_id"] = require_int(changes["studentId"], "studentId")
        if "date" in changes:
            day = parse_date_field(changes["date"], "date")
            fields["date"] = day
            # keep month/year consistent with a moved date unless the caller sets them
            fields["month"] = day.month
            fields["year"] = day.year
        if "session" in changes:
            fields["session"] = require_non_empty(changes["session"], "session")
        if "status" in changes:
            fields["status"] = require_enum(changes["status"], AttendanceStatus, "status")
        if "month" in changes:
            fields["month"] = require_month(changes["month"])
        if "year" in changes:
            fields["year"] = require_int(changes["year"], "year")

        self._attendance.update(current.attendance_id, fields)
        return self.get_record(current.attendance_id)

    def delete_record(self, attendance_id: int) -> None:
        if not self._attendance.delete_by_id(int(attendance_id)):
            raise NotFoundError("Attendance record not found")
