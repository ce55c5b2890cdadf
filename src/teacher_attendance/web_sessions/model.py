from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import WebSessionStatus


@dataclass(frozen=True)
class WebSession:
    """One QR login attempt: issued pending, then authenticated or disconnected."""

    session_id: str
    status: WebSessionStatus
    expires_at: datetime
    company_id: Optional[str] = None
    teacher_id: Optional[int] = None
    token: Optional[str] = None
    authenticated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == WebSessionStatus.PENDING

    @property
    def is_authenticated(self) -> bool:
        return self.status == WebSessionStatus.AUTHENTICATED

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "status": self.status.value,
            "companyId": self.company_id,
            "teacherId": self.teacher_id,
            "expiresAt": isoformat_or_none(self.expires_at),
            "authenticatedAt": isoformat_or_none(self.authenticated_at),
            "createdAt": isoformat_or_none(self.created_at),
        }
