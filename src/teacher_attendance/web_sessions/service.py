from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Sequence

from ..auth.tokens import TokenService
from ..common.datetime_utils import now_local
from ..common.validators import require_int
from ..core.constants import DEFAULT_WEB_SESSION_TTL_SECONDS, QR_LOGIN_PREFIX, SESSION_ID_BYTES
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..teachers.model import Teacher
from ..teachers.repository import TeacherRepository
from .model import WebSession
from .repository import WebSessionRepository

logger = logging.getLogger(__name__)


def build_qr_data(session_id: str, company_id: Optional[str]) -> str:
    return f"{QR_LOGIN_PREFIX}:{session_id}:{company_id or ''}"


@dataclass(frozen=True)
class IssuedSession:
    session_id: str
    qr_data: str
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "qrData": self.qr_data,
            "expiresAt": self.expires_at.isoformat(),
        }


class WebSessionService:
    """Use case: log a browser in by scanning a QR code from the companion app.

    Flow:
        1) browser asks for a session id and renders it as a QR code
        2) companion app scans it and calls ``verify`` with the teacher id
        3) browser polls ``check_auth`` until a token shows up
    """

    def __init__(
        self,
        sessions: WebSessionRepository,
        teachers: TeacherRepository,
        tokens: TokenService,
        *,
        ttl_seconds: int = DEFAULT_WEB_SESSION_TTL_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sessions = sessions
        self._teachers = teachers
        self._tokens = tokens
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._clock = clock

    def _get(self, session_id: Any) -> WebSession:
        session = self._sessions.get(str(session_id)) if session_id else None
        if not session:
            raise NotFoundError("Session not found")
        return session

    def generate(self, company_id: Optional[str] = None) -> IssuedSession:
        company_id = str(company_id) if company_id else None
        session_id = secrets.token_hex(SESSION_ID_BYTES)
        expires_at = self._clock() + self._ttl
        self._sessions.create(session_id=session_id, company_id=company_id, expires_at=expires_at)
        logger.info("Issued web session %s (company=%s)", session_id[:8], company_id)
        return IssuedSession(
            session_id=session_id,
            qr_data=build_qr_data(session_id, company_id),
            expires_at=expires_at,
        )

    def qr_data_for(self, session_id: str) -> str:
        session = self._get(session_id)
        return build_qr_data(session.session_id, session.company_id)

    def verify(self, *, session_id: Any, teacher_id: Any) -> tuple[WebSession, Teacher, str]:
        if not session_id or teacher_id in (None, ""):
            raise ValidationError("sessionId and teacherId are required")

        session = self._get(session_id)
        now = self._clock()
        if session.is_pending and session.is_expired(now):
            raise ValidationError("Session expired")
        if not session.is_pending:
            raise ValidationError("Session is no longer pending")

        teacher = self._teachers.get_by_id(require_int(teacher_id, "teacherId"))
        if not teacher:
            raise NotFoundError("Teacher not found")
        if not teacher.is_active:
            raise AuthenticationError("Teacher account is inactive")
        if session.company_id and teacher.company_id != session.company_id:
            raise AuthenticationError("Teacher does not belong to this company")

        company_id = session.company_id or teacher.company_id
        token = self._tokens.issue_web_token(
            session_id=session.session_id,
            teacher_id=teacher.teacher_id,
            company_id=company_id,
        )
        # an authenticated session lives as long as its token
        self._sessions.mark_authenticated(
            session.session_id,
            teacher_id=teacher.teacher_id,
            company_id=company_id,
            token=token,
            authenticated_at=now,
            expires_at=now + self._tokens.lifetime,
        )
        logger.info("Web session %s authenticated for teacher %s", session.session_id[:8], teacher.teacher_id)
        return self._get(session.session_id), teacher, token

    def check_auth(self, session_id: str) -> dict:
        session = self._get(session_id)
        expired = session.is_expired(self._clock())
        result: dict = {
            "sessionId": session.session_id,
            "authenticated": session.is_authenticated and not expired,
            "expired": expired,
            "status": session.status.value,
        }
        if result["authenticated"]:
            result["token"] = session.token
            teacher = self._teachers.get_by_id(session.teacher_id) if session.teacher_id else None
            result["teacher"] = teacher.to_dict() if teacher else None
        return result

    def disconnect(self, session_id: Any) -> None:
        if not session_id:
            raise ValidationError("sessionId is required")
        session = self._get(session_id)
        self._sessions.mark_disconnected(session.session_id)
        logger.info("Web session %s disconnected", session.session_id[:8])

    def list_active(self, company_id: Optional[str] = None) -> Sequence[WebSession]:
        return self._sessions.list_active(company_id=company_id or None, now=self._clock())

    def active_teachers(self, company_id: str) -> Sequence[Teacher]:
        ids = []
        for s in self.list_active(company_id):
            if s.teacher_id is not None and s.teacher_id not in ids:
                ids.append(s.teacher_id)
        if not ids:
            return []
        return self._teachers.list_by_ids(ids)

    def teacher_sessions(self, company_id: str) -> list[dict]:
        """Active sessions of a company, each with the teacher holding it."""
        sessions = self.list_active(company_id)
        ids = {s.teacher_id for s in sessions if s.teacher_id is not None}
        teachers = {t.teacher_id: t for t in self._teachers.list_by_ids(sorted(ids))} if ids else {}

        result = []
        for s in sessions:
            teacher = teachers.get(s.teacher_id)
            entry = s.to_dict()
            entry["teacher"] = teacher.to_dict() if teacher else None
            result.append(entry)
        return result

    def _authenticated(self, session_id: Any) -> WebSession:
        session = self._get(session_id)
        if not session.is_authenticated or session.is_expired(self._clock()):
            raise NotFoundError("No authenticated teacher for this session")
        return session

    def logout_teacher(self, session_id: Any, *, company_id: Optional[str] = None) -> None:
        """End a teacher's authenticated session, optionally only within ``company_id``."""
        if not session_id:
            raise ValidationError("sessionId is required")
        session = self._authenticated(session_id)
        if company_id is not None and session.company_id != company_id:
            raise NotFoundError("Session not found")
        self._sessions.mark_disconnected(session.session_id)
        logger.info("Teacher %s logged out of web session %s", session.teacher_id, session.session_id[:8])

    def teacher_data(self, session_id: str) -> Teacher:
        session = self._authenticated(session_id)
        teacher = self._teachers.get_by_id(session.teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher
