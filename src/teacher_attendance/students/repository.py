from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list(self, *, teacher_id: Optional[int] = None, class_id: Optional[int] = None) -> Sequence[Student]:
        """Newest first. ``teacher_id`` keeps students whose class belongs to that teacher."""
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_code(self, student_code: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, name: str, student_code: str, email: Optional[str], class_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, student_id: int, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError
