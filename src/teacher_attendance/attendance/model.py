from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for a student in a session."""

    attendance_id: int
    student_id: int
    date: date
    session: str
    status: AttendanceStatus
    month: int
    year: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "date": self.date.isoformat(),
            "session": self.session,
            "status": self.status.value,
            "month": self.month,
            "year": self.year,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }


@dataclass(frozen=True)
class NewAttendance:
    """Validated input for a record that is about to be inserted."""

    student_id: int
    date: date
    session: str
    status: AttendanceStatus
    month: int
    year: int


@dataclass(frozen=True)
class SessionStatusCount:
    """Read-model for the attendance summary report."""

    session: str
    status: AttendanceStatus
    count: int
