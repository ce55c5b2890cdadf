from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchone
from .model import Admin
from .repository import AdminRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, email, password_hash, name, company_name, preferences, created_at, updated_at"
_UPDATABLE = {"name": "name", "company_name": "company_name"}


def _load_preferences(raw: Optional[str]) -> dict:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring unreadable admin preferences: %r", raw[:80])
        return {}
    return data if isinstance(data, dict) else {}


def _row_to_admin(r: dict) -> Admin:
    return Admin(
        admin_id=int(r["id"]),
        email=r["email"],
        password_hash=r["password_hash"],
        name=r["name"],
        company_name=r["company_name"],
        preferences=_load_preferences(r.get("preferences")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: Any) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admins WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _row_to_admin(row) if row else None

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        return self._get_one("id", int(admin_id))

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self._get_one("email", email)

    def create(self, *, email: str, password_hash: str, name: str, company_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admins(email, password_hash, name, company_name) VALUES(%s,%s,%s,%s)",
                (email, password_hash, name, company_name),
            )
            return int(cur.lastrowid)

    def update_profile(self, admin_id: int, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        assignments, params = build_update(_UPDATABLE, fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE admins SET {assignments} WHERE id=%s", (*params, int(admin_id)))

    def update_password(self, admin_id: int, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admins SET password_hash=%s WHERE id=%s", (password_hash, int(admin_id)))

    def save_preferences(self, admin_id: int, preferences: Mapping[str, Any]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE admins SET preferences=%s WHERE id=%s",
                (json.dumps(dict(preferences)), int(admin_id)),
            )
