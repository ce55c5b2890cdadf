from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_int, optional_str, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository


class StudentService:
    """Use case: teachers manage students and their class enrolment."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, *, teacher_id: Optional[int] = None, class_id: Optional[int] = None) -> Sequence[Student]:
        return self._students.list(teacher_id=teacher_id, class_id=class_id)

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def _ensure_unique_code(self, student_code: str, *, exclude_id: Optional[int] = None) -> None:
        other = self._students.get_by_code(student_code)
        if other and other.student_id != exclude_id:
            raise ValidationError("A student with this studentId already exists")

    def create_student(self, *, name: Any, student_code: Any, email: Any = None, class_id: Any = None) -> Student:
        name = require_non_empty(name, "name")
        student_code = require_non_empty(student_code, "studentId")
        self._ensure_unique_code(student_code)

        student_id = self._students.create(
            name=name,
            student_code=student_code,
            email=optional_str(email, "email"),
            class_id=optional_int(class_id, "classId"),
        )
        return self.get_student(student_id)

    def update_student(self, student_id: int, changes: Mapping[str, Any]) -> Student:
        current = self.get_student(student_id)

        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "name")
        if "studentId" in changes:
            fields["student_code"] = require_non_empty(changes["studentId"], "studentId")
            self._ensure_unique_code(fields["student_code"], exclude_id=current.student_id)
        if "email" in changes:
            fields["email"] = optional_str(changes["email"], "email")
        if "classId" in changes:
            fields["class_id"] = optional_int(changes["classId"], "classId")

        self._students.update(current.student_id, fields)
        return self.get_student(current.student_id)

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete_by_id(int(student_id)):
            raise NotFoundError("Student not found")
