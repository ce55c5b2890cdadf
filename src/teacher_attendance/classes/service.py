from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    """Use case: teachers manage their classes."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_classes(self, *, teacher_id: Optional[int] = None) -> Sequence[SchoolClass]:
        return self._classes.list(teacher_id=teacher_id)

    def get_class(self, class_id: int) -> SchoolClass:
        cls = self._classes.get_by_id(int(class_id))
        if not cls:
            raise NotFoundError("Class not found")
        return cls

    def create_class(self, *, name: Any, teacher_id: Any) -> SchoolClass:
        name = require_non_empty(name, "name")
        if teacher_id is None or teacher_id == "":
            raise ValidationError("teacherId is required")
        class_id = self._classes.create(name=name, teacher_id=require_int(teacher_id, "teacherId"))
        return self.get_class(class_id)

    def update_class(self, class_id: int, changes: Mapping[str, Any]) -> SchoolClass:
        current = self.get_class(class_id)

        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "name")
        if "teacherId" in changes:
            fields["teacher_id"] = require_int(changes["teacherId"], "teacherId")

        self._classes.update(current.class_id, fields)
        return self.get_class(current.class_id)

    def delete_class(self, class_id: int) -> None:
        if not self._classes.delete_by_id(int(class_id)):
            raise NotFoundError("Class not found")
