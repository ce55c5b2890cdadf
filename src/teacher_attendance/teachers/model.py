from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import TeacherStatus


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a teacher belonging to one company (admin account).

    ``teacher_code`` is the human-facing teacher ID (``teacherId`` in JSON);
    ``teacher_id`` is the primary key.
    """

    teacher_id: int
    name: str
    email: str
    teacher_code: str
    status: TeacherStatus
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    company_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == TeacherStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.teacher_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "teacherId": self.teacher_code,
            "status": self.status.value,
            "profilePicture": self.profile_picture,
            "companyId": self.company_id,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
