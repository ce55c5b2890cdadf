from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import TeacherStatus
from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for Teacher.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def list(self, *, company_id: Optional[str] = None) -> Sequence[Teacher]:
        raise NotImplementedError

    def list_by_ids(self, teacher_ids: Sequence[int]) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_code(self, teacher_code: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        teacher_code: str,
        status: TeacherStatus,
        phone: Optional[str],
        profile_picture: Optional[str],
        company_id: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(self, teacher_id: int, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete_by_id(self, teacher_id: int) -> bool:
        raise NotImplementedError
