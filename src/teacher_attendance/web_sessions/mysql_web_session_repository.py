from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import WebSessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WebSession
from .repository import WebSessionRepository

_COLUMNS = "session_id, company_id, status, teacher_id, token, expires_at, authenticated_at, created_at"


def _row_to_session(r: dict) -> WebSession:
    return WebSession(
        session_id=r["session_id"],
        status=WebSessionStatus(r["status"]),
        expires_at=r["expires_at"],
        company_id=r.get("company_id"),
        teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
        token=r.get("token"),
        authenticated_at=r.get("authenticated_at"),
        created_at=r.get("created_at"),
    )


class MySQLWebSessionRepository(WebSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, session_id: str, company_id: Optional[str], expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO web_sessions(session_id, company_id, status, expires_at) VALUES(%s,%s,%s,%s)",
                (session_id, company_id, WebSessionStatus.PENDING.value, expires_at),
            )

    def get(self, session_id: str) -> Optional[WebSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM web_sessions WHERE session_id=%s", (session_id,))
            row = fetchone(cur)
            return _row_to_session(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE web_sessions
                SET status=%s, teacher_id=%s, company_id=%s, token=%s, authenticated_at=%s, expires_at=%s
                WHERE session_id=%s
                """,
                (
                    WebSessionStatus.AUTHENTICATED.value,
                    int(teacher_id),
                    company_id,
                    token,
                    authenticated_at,
                    expires_at,
                    session_id,
                ),
            )

    def mark_disconnected(self, session_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE web_sessions SET status=%s, token=NULL WHERE session_id=%s",
                (WebSessionStatus.DISCONNECTED.value, session_id),
            )

    def list_active(self, *, company_id: Optional[str], now: datetime) -> Sequence[WebSession]:
        sql = f"SELECT {_COLUMNS} FROM web_sessions WHERE status=%s AND expires_at > %s"
        params: list = [WebSessionStatus.AUTHENTICATED.value, now]
        if company_id:
            sql += " AND company_id=%s"
            params.append(company_id)
        sql += " ORDER BY authenticated_at DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_session(r) for r in fetchall(cur)]
