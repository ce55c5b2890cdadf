from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def list(self, *, teacher_id: Optional[int] = None) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def create(self, *, name: str, teacher_id: int) -> int:
        raise NotImplementedError

    def update(self, class_id: int, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete_by_id(self, class_id: int) -> bool:
        raise NotImplementedError
