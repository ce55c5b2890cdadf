from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import WebSession


class WebSessionRepository(Protocol):
    def create(self, *, session_id: str, company_id: Optional[str], expires_at: datetime) -> None:
        raise NotImplementedError

    def get(self, session_id: str) -> Optional[WebSession]:
        raise NotImplementedError

    def mark_authenticated(
        self,
        session_id: str,
        *,
        teacher_id: int,
        company_id: Optional[str],
        token: str,
        authenticated_at: datetime,
        expires_at: datetime,
    ) -> None:
        raise NotImplementedError

    def mark_disconnected(self, session_id: str) -> None:
        raise NotImplementedError

    def list_active(self, *, company_id: Optional[str], now: datetime) -> Sequence[WebSession]:
        raise NotImplementedError
