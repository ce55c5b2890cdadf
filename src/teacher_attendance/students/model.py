from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class Student:
    """Domain entity: a student, optionally enrolled in one class.

    ``student_code`` is the roll number shown to people (``studentId`` in JSON).
    Attendance and payments reference the primary key ``student_id``.
    """

    student_id: int
    name: str
    student_code: str
    email: Optional[str] = None
    class_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "studentId": self.student_code,
            "classId": self.class_id,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
