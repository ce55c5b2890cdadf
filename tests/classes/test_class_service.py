from __future__ import annotations

import pytest

from teacher_attendance.classes.service import ClassService
from teacher_attendance.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def svc(classes_repo):
    return ClassService(classes_repo)


def test_create_requires_name_and_teacher(svc):
    with pytest.raises(ValidationError, match="name is required"):
        svc.create_class(name="", teacher_id=1)
    with pytest.raises(ValidationError, match="teacherId is required"):
        svc.create_class(name="Math 10", teacher_id=None)


def test_list_filters_by_teacher(svc):
    mine = svc.create_class(name="Math 10", teacher_id=1)
    svc.create_class(name="Physics", teacher_id=2)

    assert [c.class_id for c in svc.list_classes(teacher_id=1)] == [mine.class_id]


def test_update_and_delete(svc):
    cls = svc.create_class(name="Math 10", teacher_id="1")

    assert svc.update_class(cls.class_id, {"name": "Math 11"}).name == "Math 11"
    svc.delete_class(cls.class_id)
    with pytest.raises(NotFoundError, match="Class not found"):
        svc.get_class(cls.class_id)
