from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_str, require_enum, require_non_empty
from ..core.enums import TeacherStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Teacher
from .repository import TeacherRepository

logger = logging.getLogger(__name__)


class TeacherService:
    """Use case: admins manage the teachers of their company."""

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def list_teachers(self, *, company_id: Optional[str] = None) -> Sequence[Teacher]:
        return self._teachers.list(company_id=company_id)

    def get_teacher(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(int(teacher_id))
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def _get_in_company(self, teacher_id: int, company_id: Optional[str]) -> Teacher:
        """Teachers of other companies look like missing ones to a scoped caller."""
        teacher = self.get_teacher(teacher_id)
        if company_id is not None and teacher.company_id != str(company_id):
            raise NotFoundError("Teacher not found")
        return teacher

    @staticmethod
    def _check_target_company(requested: Any, company_id: Optional[str]) -> None:
        if company_id is not None and requested not in (None, "") and str(requested) != str(company_id):
            raise AuthorizationError("Cannot manage teachers of another company")

    def _ensure_unique(self, *, email: Optional[str], teacher_code: Optional[str], exclude_id: Optional[int] = None) -> None:
        if email:
            other = self._teachers.get_by_email(email)
            if other and other.teacher_id != exclude_id:
                raise ValidationError("A teacher with this email already exists")
        if teacher_code:
            other = self._teachers.get_by_code(teacher_code)
            if other and other.teacher_id != exclude_id:
                raise ValidationError("A teacher with this teacherId already exists")

    def create_teacher(
        self,
        *,
        name: Any,
        email: Any,
        teacher_code: Any,
        status: Any = None,
        phone: Any = None,
        profile_picture: Any = None,
        company_id: Any = None,
        scope: Optional[str] = None,
    ) -> Teacher:
        """Create a teacher; a ``scope`` company pins the new teacher to it."""
        self._check_target_company(company_id, scope)
        if scope is not None:
            company_id = str(scope)
        name = require_non_empty(name, "name")
        email = require_non_empty(email, "email").lower()
        teacher_code = require_non_empty(teacher_code, "teacherId")
        status_e = require_enum(status or TeacherStatus.ACTIVE.value, TeacherStatus, "status")

        self._ensure_unique(email=email, teacher_code=teacher_code)

        teacher_id = self._teachers.create(
            name=name,
            email=email,
            teacher_code=teacher_code,
            status=status_e,
            phone=optional_str(phone, "phone"),
            profile_picture=optional_str(profile_picture, "profilePicture"),
            company_id=optional_str(company_id, "companyId"),
        )
        logger.info("Created teacher %s (%s)", teacher_id, teacher_code)
        return self.get_teacher(teacher_id)

    def update_teacher(self, teacher_id: int, changes: Mapping[str, Any], *, scope: Optional[str] = None) -> Teacher:
        current = self._get_in_company(teacher_id, scope)
        if "companyId" in changes:
            self._check_target_company(changes["companyId"], scope)

        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "name")
        if "email" in changes:
            fields["email"] = require_non_empty(changes["email"], "email").lower()
        if "teacherId" in changes:
            fields["teacher_code"] = require_non_empty(changes["teacherId"], "teacherId")
        if "status" in changes:
            fields["status"] = require_enum(changes["status"], TeacherStatus, "status")
        if "phone" in changes:
            fields["phone"] = optional_str(changes["phone"], "phone")
        if "profilePicture" in changes:
            fields["profile_picture"] = optional_str(changes["profilePicture"], "profilePicture")
        if "companyId" in changes:
            fields["company_id"] = str(scope) if scope is not None else optional_str(changes["companyId"], "companyId")

        self._ensure_unique(
            email=fields.get("email"),
            teacher_code=fields.get("teacher_code"),
            exclude_id=current.teacher_id,
        )
        self._teachers.update(current.teacher_id, fields)
        return self.get_teacher(current.teacher_id)

    def set_status(self, teacher_id: int, status: Any, *, scope: Optional[str] = None) -> Teacher:
        status_e = require_enum(status, TeacherStatus, "status")
        current = self._get_in_company(teacher_id, scope)
        self._teachers.update(current.teacher_id, {"status": status_e})
        logger.info("Teacher %s is now %s", current.teacher_id, status_e.value)
        return self.get_teacher(current.teacher_id)

    def delete_teacher(self, teacher_id: int, *, scope: Optional[str] = None) -> None:
        self._get_in_company(teacher_id, scope)
        if not self._teachers.delete_by_id(int(teacher_id)):
            raise NotFoundError("Teacher not found")
