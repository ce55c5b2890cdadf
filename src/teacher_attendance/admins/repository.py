from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import Admin


class AdminRepository(Protocol):
    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Admin]:
        raise NotImplementedError

    def create(self, *, email: str, password_hash: str, name: str, company_name: str) -> int:
        raise NotImplementedError

    def update_profile(self, admin_id: int, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def update_password(self, admin_id: int, password_hash: str) -> None:
        raise NotImplementedError

    def save_preferences(self, admin_id: int, preferences: Mapping[str, Any]) -> None:
        raise NotImplementedError
