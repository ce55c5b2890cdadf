from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendance, SessionStatusCount


class AttendanceRepository(Protocol):
    def list(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest date first."""
        raise NotImplementedError

    def list_for_students(self, student_ids: Sequence[int], *, month: int, year: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: NewAttendance) -> int:
        raise NotImplementedError

    def create_many(self, records: Sequence[NewAttendance]) -> list[int]:
        """Insert every record or none of them."""
        raise NotImplementedError

    def update(self, attendance_id: int, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def count_by_session_and_status(
        self,
        *,
        month: int,
        year: int,
        teacher_id: Optional[int] = None,
    ) -> Sequence[SessionStatusCount]:
        raise NotImplementedError
